"""
GitHub data fetching module.

This module handles all GitHub API interactions for collecting a user's
commits, pull requests and issues for a date range using PyGithub.
"""

import logging
from typing import Any, Dict, Iterable, List, Tuple

import requests

from .models import ActivityData, DateRange, FetchResult

# External libs
try:
    from github import Auth, Github, GithubException
except Exception as e:
    raise RuntimeError("PyGithub is required. Install with: pip install PyGithub") from e

# Set up logging
logger = logging.getLogger("activity-summary.fetcher")

PER_PAGE = 100
MAX_PAGES = 10
COMMIT_SEARCH_ACCEPT = "application/vnd.github.cloak-preview"

# kind -> (endpoint, query template, sort field, extra headers)
SEARCHES = {
    "commits": ("/search/commits", "author:{user} author-date:{range}", "author-date",
                {"Accept": COMMIT_SEARCH_ACCEPT}),
    "prs": ("/search/issues", "author:{user} type:pr created:{range}", "created", {}),
    "issues": ("/search/issues", "author:{user} type:issue created:{range}", "created", {}),
}

PROGRESS_LABELS = {
    "commits": "commits",
    "prs": "pull requests",
    "issues": "issues",
}


class BearerToken(Auth.Token):
    """Personal access token sent as ``Authorization: Bearer <token>``."""

    @property
    def token_type(self) -> str:
        return "Bearer"


class GitHubFetcher:
    """
    Fetch activity from the GitHub search API using PyGithub.

    Pages are requested one at a time through the client's requester so the
    raw JSON items are kept for the scratch dumps. Requests are never retried:
    a page that fails is treated like an empty page and ends the search.

    Args:
        token: Personal access token.
        base_url: API root, for GitHub Enterprise installations.
    """

    def __init__(self, token: str, base_url: str = "https://api.github.com") -> None:
        try:
            self._g = Github(auth=BearerToken(token), base_url=base_url, per_page=PER_PAGE, retry=None)
            logger.debug("GitHub client initialized for %s", base_url)
        except Exception as e:
            logger.error("Failed to initialize GitHub client: %s", e)
            raise RuntimeError(f"GitHub client initialization failed: {e}") from e

    def search(self, kind: str, username: str, date_range: DateRange) -> List[Dict[str, Any]]:
        """
        Run one search query for one user, following pagination.

        Stops on an empty page, once ``total_count`` items have been collected,
        or after MAX_PAGES pages.

        Args:
            kind: One of "commits", "prs", "issues"
            username: GitHub login used as the ``author:`` qualifier
            date_range: Month being summarized

        Returns:
            Raw search items in API order (newest first)
        """
        endpoint, query, sort, headers = SEARCHES[kind]
        params = {
            "q": query.format(user=username, range=date_range.search_range),
            "sort": sort,
            "order": "desc",
            "per_page": PER_PAGE,
        }

        items: List[Dict[str, Any]] = []
        for page in range(1, MAX_PAGES + 1):
            page_items, total_count = self._fetch_page(endpoint, dict(params, page=page), headers)
            if not page_items:
                break
            items.extend(page_items)
            logger.debug("%s for %s: page %d, %d/%d items", kind, username, page, len(items), total_count)
            if len(items) >= total_count:
                break

        logger.info("Fetched %d %s for %s", len(items), kind, username)
        return items

    def _fetch_page(self, endpoint: str, params: Dict[str, Any],
                    headers: Dict[str, str]) -> Tuple[List[Dict[str, Any]], int]:
        try:
            _, data = self._g.requester.requestJsonAndCheck("GET", endpoint, parameters=params, headers=headers)
        except (GithubException, requests.exceptions.RequestException) as e:
            logger.warning("GitHub request %s (page %s) failed, treating as end of results: %s",
                           endpoint, params.get("page"), e)
            return [], 0

        if not isinstance(data, dict):
            logger.warning("Unexpected response from %s: %r", endpoint, data)
            return [], 0
        return data.get("items") or [], data.get("total_count") or 0

    def fetch_activity(self, users: Iterable[str], date_range: DateRange) -> ActivityData:
        """
        Collect commits, pull requests and issues for every user.

        Users are processed one after the other, and for each user the three
        query kinds in order. Empty usernames are skipped.
        """
        users = [u.strip() for u in users if u and u.strip()]
        activity = ActivityData(users=users)

        for user in users:
            print(f"Fetching GitHub activity for @{user} from {date_range.start} to {date_range.end}...")
            for result in activity.results():
                print(f"Fetching {PROGRESS_LABELS[result.kind]}...")
                result.items.extend(self.search(result.kind, user, date_range))

        return activity


def total_items(results: Iterable[FetchResult]) -> int:
    return sum(len(r) for r in results)
