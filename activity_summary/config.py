"""
Configuration module.

Credentials and options come from the process environment. A local ``.env``
file, if present, is exported into the environment first so that values can
be kept out of the shell history.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from dotenv import load_dotenv

logger = logging.getLogger("activity-summary.config")

DEFAULT_MODEL = "anthropic/claude-3.5-sonnet"
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_TMP_DIR = ".tmp"
DEFAULT_SUMMARIES_DIR = "summaries"
REQUIRED_VARS = ("GITHUB_TOKEN", "OPENROUTER_TOKEN")


class ConfigError(RuntimeError):
    """Raised when a required setting is missing."""


def parse_list(value: Optional[str]) -> List[str]:
    """
    Split a comma-separated setting.

    Blank entries are dropped and duplicates removed, keeping the first
    occurrence.
    """
    if not value:
        return []
    items = [part.strip() for part in value.split(",")]
    return list(dict.fromkeys(item for item in items if item))


def load_env_file(path: str = ".env") -> bool:
    """
    Export ``KEY=VALUE`` lines from ``path`` into ``os.environ``.

    Lines starting with ``#`` are ignored. Values from the file win over
    variables already set in the environment.

    Returns:
        True if the file existed and was loaded
    """
    env_path = Path(path)
    if not env_path.is_file():
        logger.debug("No environment file at %s", env_path)
        return False
    print(f"Loading environment variables from {env_path}...")
    load_dotenv(env_path, override=True)
    return True


@dataclass
class Config:
    """Settings for one run."""
    github_token: str
    openrouter_token: str
    default_users: List[str] = field(default_factory=list)
    models: List[str] = field(default_factory=lambda: [DEFAULT_MODEL])
    team_name: Optional[str] = None
    primary_orgs: List[str] = field(default_factory=list)
    github_api_url: str = DEFAULT_GITHUB_API_URL
    openrouter_url: str = DEFAULT_OPENROUTER_URL
    tmp_dir: str = DEFAULT_TMP_DIR
    summaries_dir: str = DEFAULT_SUMMARIES_DIR

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None,
                 required: Sequence[str] = REQUIRED_VARS) -> "Config":
        """
        Build the configuration from environment variables.

        Raises:
            ConfigError: If one of the ``required`` variables is not set
        """
        env = os.environ if environ is None else environ

        for name in required:
            if not env.get(name):
                raise ConfigError(f"{name} is not set")

        models = parse_list(env.get("OPENROUTER_MODELS")) or parse_list(env.get("OPENROUTER_MODEL"))

        return cls(
            github_token=env.get("GITHUB_TOKEN", ""),
            openrouter_token=env.get("OPENROUTER_TOKEN", ""),
            default_users=parse_list(env.get("GITHUB_USERNAME")),
            models=models or [DEFAULT_MODEL],
            team_name=env.get("TEAM_NAME") or None,
            primary_orgs=parse_list(env.get("PRIMARY_ORGS")),
            github_api_url=env.get("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL,
            openrouter_url=env.get("OPENROUTER_URL") or DEFAULT_OPENROUTER_URL,
            tmp_dir=env.get("ACTIVITY_TMP_DIR") or DEFAULT_TMP_DIR,
            summaries_dir=env.get("ACTIVITY_SUMMARIES_DIR") or DEFAULT_SUMMARIES_DIR,
        )
