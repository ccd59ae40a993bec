"""
Data models for the activity summary.

This module contains the shared data structures used across all modules.
Everything here is transient: records are built from GitHub search results,
passed between pipeline stages and discarded when the process exits.
"""

import datetime
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

QUERY_KINDS = ("commits", "prs", "issues")


@dataclass
class CommitInfo:
    """A single commit returned by the commit search."""
    sha: str
    repository: str
    message: str
    url: str
    date: Optional[str]
    author: Optional[str]

    @property
    def headline(self) -> str:
        """First line of the commit message."""
        lines = self.message.splitlines()
        return lines[0].strip() if lines else ""

    @classmethod
    def from_search_item(cls, item: Dict[str, Any]) -> "CommitInfo":
        commit = item.get("commit") or {}
        author = item.get("author") or {}
        commit_author = commit.get("author") or {}
        return cls(
            sha=item.get("sha", ""),
            repository=(item.get("repository") or {}).get("full_name", ""),
            message=commit.get("message") or "",
            url=item.get("html_url", ""),
            date=commit_author.get("date"),
            author=author.get("login") or commit_author.get("name"),
        )


@dataclass
class IssueInfo:
    """A pull request or issue returned by the issue search."""
    kind: str
    repository: str
    number: int
    title: str
    state: str
    url: str
    created_at: Optional[str]
    author: Optional[str]

    @classmethod
    def from_search_item(cls, kind: str, item: Dict[str, Any]) -> "IssueInfo":
        # repository_url looks like https://api.github.com/repos/<owner>/<name>
        repo_url = item.get("repository_url") or ""
        repository = "/".join(repo_url.rstrip("/").split("/")[-2:])
        return cls(
            kind=kind,
            repository=repository,
            number=item.get("number", 0),
            title=item.get("title") or "",
            state=item.get("state") or "",
            url=item.get("html_url", ""),
            created_at=item.get("created_at"),
            author=(item.get("user") or {}).get("login"),
        )


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-day range covering one month."""
    start: datetime.date
    end: datetime.date

    @property
    def month(self) -> str:
        return self.start.strftime("%Y-%m")

    @property
    def search_range(self) -> str:
        """Range qualifier value understood by the GitHub search API."""
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


@dataclass
class FetchResult:
    """Raw search items for one query kind, accumulated across users."""
    kind: str
    items: List[Dict[str, Any]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def records(self) -> list:
        if self.kind == "commits":
            return [CommitInfo.from_search_item(item) for item in self.items]
        kind = "pr" if self.kind == "prs" else "issue"
        return [IssueInfo.from_search_item(kind, item) for item in self.items]


@dataclass
class ActivityData:
    """Everything fetched for one run."""
    users: List[str]
    commits: FetchResult = field(default_factory=lambda: FetchResult("commits"))
    prs: FetchResult = field(default_factory=lambda: FetchResult("prs"))
    issues: FetchResult = field(default_factory=lambda: FetchResult("issues"))

    @property
    def is_empty(self) -> bool:
        return not (self.commits.items or self.prs.items or self.issues.items)

    def results(self) -> List[FetchResult]:
        return [self.commits, self.prs, self.issues]


@dataclass
class ModelOutput:
    """Text returned by one language-model invocation."""
    model: str
    text: str
