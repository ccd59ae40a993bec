#!/usr/bin/env python3
"""
Main driver script for the monthly activity summary.

This script provides the command-line interface and runs the pipeline:
fetch GitHub activity for a month, format it, ask one or more language
models for a summary and write the results to the summaries directory.

Usage (example):
    python -m activity_summary.main octocat 2025-10
    python -m activity_summary.main alice,bob 2025-10 --team-name platform
    python -m activity_summary.main 2025-10          # users from GITHUB_USERNAME
"""

import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence, Tuple

from .config import Config, ConfigError, load_env_file, parse_list
from .dates import MONTH_RE, month_range
from .fetcher import GitHubFetcher, total_items
from .formatter import ActivityFormatter
from .prompt import STYLES, PromptBuilder, load_examples
from .summarizer import ModelSummarizer
from .writer import ScratchDir, SummaryWriter

# Set up logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("activity-summary")

USAGE_HINT = """Example: github-activity-summary pk910 2025-10
         github-activity-summary alice,bob 2025-10

GitHub usernames can be provided as argument or set in .env as GITHUB_USERNAME"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-activity-summary",
        description="Summarize a month of GitHub activity with a language model.",
        usage="%(prog)s [usernames] YYYY-MM [options]",
        epilog=USAGE_HINT,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("positionals", nargs="*", metavar="[usernames] YYYY-MM",
                        help="Comma-separated GitHub usernames (optional) and the month to summarize")
    parser.add_argument("--env-file", default=".env", help="Environment file to load (default: .env)")
    parser.add_argument("--models", help="Comma-separated model identifiers (overrides OPENROUTER_MODELS)")
    parser.add_argument("--style", choices=STYLES, default="bullets",
                        help="Summary layout: per-repository bullets or a five-question executive report")
    parser.add_argument("--team-name", help="Team name used in the prompt when several users are given")
    parser.add_argument("--tmp-dir", help="Scratch directory, wiped on every run (default: .tmp)")
    parser.add_argument("--summaries-dir", help="Directory for saved summaries (default: summaries)")
    parser.add_argument("--dry-run", action="store_true", help="Print the prompt instead of calling any model")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def resolve_positionals(positionals: Sequence[str], default_users: List[str]) -> Tuple[List[str], Optional[str]]:
    """
    Split the positional arguments into (users, month).

    A lone argument shaped like YYYY-MM is the month; otherwise the first
    argument is the user list and the second the month.
    """
    if len(positionals) == 1 and MONTH_RE.match(positionals[0]):
        return default_users, positionals[0]
    if len(positionals) >= 1:
        users = parse_list(positionals[0]) or default_users
        month = positionals[1] if len(positionals) > 1 else None
        return users, month
    return default_users, None


def run(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the pipeline once.

    Returns:
        Process exit status: 0 on success, 1 on any failure
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    load_env_file(args.env_file)

    if len(args.positionals) > 2:
        parser.print_usage()
        print("Error: too many arguments")
        return 1

    users, month = resolve_positionals(args.positionals, parse_list(os.environ.get("GITHUB_USERNAME")))
    if not users or not month:
        parser.print_usage()
        print(USAGE_HINT)
        return 1

    try:
        date_range = month_range(month)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    required = ("GITHUB_TOKEN",) if args.dry_run else ("GITHUB_TOKEN", "OPENROUTER_TOKEN")
    try:
        config = Config.from_env(required=required)
    except ConfigError as e:
        print(f"Error: {e}")
        print("Please set it in .env file or export it as an environment variable")
        return 1

    models = parse_list(args.models) or config.models
    scratch = ScratchDir(args.tmp_dir or config.tmp_dir)
    summaries_dir = args.summaries_dir or config.summaries_dir

    # Fetch
    scratch.reset()
    fetcher = GitHubFetcher(config.github_token, base_url=config.github_api_url)
    activity = fetcher.fetch_activity(users, date_range)

    print("Processing activity data...")
    scratch.write_raw_results(activity.results())

    if activity.is_empty:
        print("No activity found for the specified month.")
        return 1
    logger.info("Found %d activity items for %s", total_items(activity.results()), ", ".join(activity.users))

    # Format and build the prompt
    activity_text = ActivityFormatter(show_authors=len(activity.users) > 1).format(activity)
    scratch.write_text("activity-summary.txt", activity_text + "\n")

    builder = PromptBuilder(style=args.style, team_name=args.team_name or config.team_name,
                            primary_orgs=config.primary_orgs)
    examples = load_examples(summaries_dir, exclude_month=date_range.month)
    prompt = builder.build(activity_text, activity.users, examples)
    scratch.write_text("prompt.txt", prompt)

    if args.dry_run:
        print("\n===== DRY RUN: PROMPT =====")
        print(f"Models: {', '.join(models)}")
        print(f"Prompt length: {len(prompt)} characters\n")
        print(prompt)
        return 0

    # Summarize
    summarizer = ModelSummarizer(config.openrouter_token, config.openrouter_url, scratch=scratch)
    outputs = summarizer.summarize_all(models, prompt)
    if not outputs:
        print("Error: Failed to generate AI summary with any model")
        return 1

    writer = SummaryWriter(summaries_dir)
    paths = writer.write_all(date_range.month, outputs)

    print("")
    print("Summary generated successfully!")
    if len(outputs) == 1:
        (text,) = outputs.values()
        output_file = writer.write_canonical(date_range.month, text)
        print(f"Output file: {output_file}")
        print("")
        print("Preview:")
        print("=" * 40)
        print(text)
        print("=" * 40)
    else:
        print(f"{len(outputs)} models produced a summary:")
        for model, path in paths.items():
            print(f"  - {model}: {path}")
        print("")
        print("Review the outputs and copy the one you prefer to:")
        print(f"  {writer.canonical_path(date_range.month)}")

    failed = [m for m in models if m not in outputs]
    if failed:
        print(f"Models that failed: {', '.join(failed)}")
    return 0


def main() -> None:
    """Console entry point."""
    try:
        status = run()
    except KeyboardInterrupt:
        logger.info("Run interrupted by user")
        print("\nOperation cancelled by user")
        sys.exit(1)
    except Exception as e:
        logger.error("Activity summary failed: %s", e)
        print(f"Error: activity summary failed - {e}")
        sys.exit(1)
    sys.exit(status)


if __name__ == "__main__":
    main()
