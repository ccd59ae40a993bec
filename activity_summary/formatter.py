"""
Activity formatting module.

This module contains the ActivityFormatter class, which turns fetched GitHub
activity into the plain-text block handed to the language model: commits
grouped by repository, pull requests and issues listed one block per item.
"""

import collections
from typing import Dict, List

from .models import ActivityData, CommitInfo, IssueInfo


def escape_backticks(text: str) -> str:
    """Escape literal backticks so they survive embedding in the prompt."""
    return text.replace("`", "\\`")


class ActivityFormatter:
    """
    Render ActivityData as human-readable text.

    Args:
        show_authors: Append ``(@login)`` to each commit line and an
                      ``Author:`` line to each pull request and issue. Used
                      when the activity of several users is summarized together.
    """

    def __init__(self, show_authors: bool = False) -> None:
        self.show_authors = show_authors

    def format(self, activity: ActivityData) -> str:
        """
        Build the activity text.

        Sections without items are left out, so empty activity yields "".
        """
        lines: List[str] = []

        commits = activity.commits.records()
        if commits:
            lines.append("=== COMMITS ===\n")
            for repo, repo_commits in self.group_by_repository(commits).items():
                lines.append(f"Repository: {repo} ({len(repo_commits)} commits)")
                lines.extend(self._commit_line(c) for c in repo_commits)
                lines.append("")

        prs = activity.prs.records()
        if prs:
            lines.append("=== PULL REQUESTS ===\n")
            lines.extend(self._issue_block(pr, "PR") for pr in prs)

        issues = activity.issues.records()
        if issues:
            lines.append("=== ISSUES ===\n")
            lines.extend(self._issue_block(issue, "Issue") for issue in issues)

        return "\n".join(lines)

    @staticmethod
    def group_by_repository(commits: List[CommitInfo]) -> Dict[str, List[CommitInfo]]:
        """
        Group commits by repository full name.

        Repositories are sorted by name; commits keep the API order inside
        each group.
        """
        groups: Dict[str, List[CommitInfo]] = collections.defaultdict(list)
        for commit in commits:
            groups[commit.repository].append(commit)
        return {repo: groups[repo] for repo in sorted(groups)}

    def _commit_line(self, commit: CommitInfo) -> str:
        line = f"- {commit.headline}"
        if self.show_authors and commit.author:
            line += f" (@{commit.author})"
        return line

    def _issue_block(self, item: IssueInfo, label: str) -> str:
        block = (
            f"Repository: {item.repository}\n"
            f"{label} #{item.number}: {item.title}\n"
            f"State: {item.state}\n"
        )
        if self.show_authors and item.author:
            block += f"Author: @{item.author}\n"
        return block + f"URL: {item.url}\n"
