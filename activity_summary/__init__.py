"""
Activity Summary - turns a month of GitHub activity into a short written summary.
"""

from .models import ActivityData, CommitInfo, DateRange, FetchResult, IssueInfo, ModelOutput
from .config import Config, ConfigError, load_env_file
from .dates import month_range
from .fetcher import GitHubFetcher
from .formatter import ActivityFormatter
from .prompt import PromptBuilder
from .summarizer import ModelSummarizer
from .writer import ScratchDir, SummaryWriter
from .main import main

__all__ = [
    'ActivityData',
    'CommitInfo',
    'DateRange',
    'FetchResult',
    'IssueInfo',
    'ModelOutput',
    'Config',
    'ConfigError',
    'load_env_file',
    'month_range',
    'GitHubFetcher',
    'ActivityFormatter',
    'PromptBuilder',
    'ModelSummarizer',
    'ScratchDir',
    'SummaryWriter',
    'main'
]
