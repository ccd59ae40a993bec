"""
Prompt construction module.

Fills the fixed summary template with the audience description, the
formatted activity and earlier summaries that serve as style examples.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Sequence

from .formatter import escape_backticks

logger = logging.getLogger("activity-summary.prompt")

STYLES = ("bullets", "executive")
EXAMPLE_MAX_LINES = 100
CANONICAL_RE = re.compile(r"^\d{4}-\d{2}\.txt$")

INTRO = """You are a helpful assistant that generates monthly work activity summaries for {audience}.
You will be given GitHub activity data including commits, pull requests, and issues for various repositories.

GitHub Activity Data:
{activity}
"""

BULLETS_FORMAT = """Based on the activity above, generate a concise monthly work summary in the following format:

Format Guidelines:
- Group activities by repository/project name (use short name, not full path)
- Use bullet points with concise descriptions of what was done
- Focus on meaningful work: features added, bugs fixed, improvements made
- Use sub-bullets with arrows (→) for additional context or explanations (only if necessary)
- Keep descriptions concise and action-oriented
- Include a "side-quests:" section at the end for miscellaneous or smaller contributions
- Use lowercase for project names
- Do NOT include commit hashes, PR numbers, or technical jargon unless necessary
- Summarize and group similar commits/PRs together
- Focus on the "what" and "why", not the "how"

Example format:
project-name:
* added new feature for X
* fixed issue with Y
  → explanation or additional context
* improved Z performance

another-project:
* implemented A
* refactored B to support C

side-quests:
* miscellaneous contribution to project D
* minor fix in project E
"""

EXECUTIVE_FORMAT = """Based on the activity above, write a short executive report for non-technical readers.
Answer exactly these five questions, in this order, each as a numbered heading followed by 2-4 plain sentences or bullets:

1. What was accomplished this month?
2. Which projects received the most attention, and why do they matter?
3. Which problems were solved for users or for the team?
4. What work is still in progress (open pull requests or issues)?
5. What are the risks, blockers or recommended next steps?

Use plain language. Name projects by their short name. Do not list individual commits.
"""

EXAMPLES_SECTION = """
Here are some real examples for reference:
{examples}
"""

RULES = """
Do NOT respond with suggestions or meta-commentary! The response will be saved directly to a file.
Do NOT include markdown code blocks or formatting.
Generate ONLY the summary content in the exact format shown above.
Keep it short and precise. Do not include technical details or explanations.
Do not include commit hashes, PR numbers, or technical jargon unless necessary.
Avoid repeating previously recorded activities or generic updates (combine them if there are a lot of similar activities)."""

SIDE_QUEST_RULE = "\nAll repositories that live outside the {orgs} organization should be treated as side quests."


def load_examples(summaries_dir: str, exclude_month: Optional[str] = None,
                  max_lines: int = EXAMPLE_MAX_LINES) -> str:
    """
    Read saved canonical summaries (``YYYY-MM.txt``) as style examples.

    Each file is truncated to its first ``max_lines`` lines. The file for
    ``exclude_month`` is skipped so a re-run does not copy its own output.
    Per-model drafts are not used.
    """
    directory = Path(summaries_dir)
    if not directory.is_dir():
        return ""

    blocks: List[str] = []
    for path in sorted(directory.glob("*.txt")):
        if not CANONICAL_RE.match(path.name) or path.stem == exclude_month:
            continue
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            head = f.read().splitlines()[:max_lines]
        blocks.append(f"\n\nExample from {path.name}:\n" + "\n".join(head) + "\n\n---\n")

    logger.debug("Loaded %d example summaries from %s", len(blocks), directory)
    return "".join(blocks)


class PromptBuilder:
    """
    Build the prompt sent to every model.

    Args:
        style: "bullets" for a per-repository bullet list, "executive" for a
               five-question executive report.
        team_name: Name used for the audience when several users are summarized.
        primary_orgs: Organizations whose repositories count as main work;
                      anything else is a side quest.
    """

    def __init__(self, style: str = "bullets", team_name: Optional[str] = None,
                 primary_orgs: Sequence[str] = ()) -> None:
        if style not in STYLES:
            raise ValueError(f"Unknown style {style!r}, expected one of: {', '.join(STYLES)}")
        self.style = style
        self.team_name = team_name
        self.primary_orgs = list(primary_orgs)

    def describe_audience(self, users: Sequence[str]) -> str:
        if len(users) == 1:
            return f"a software engineer (@{users[0]})"
        members = ", ".join(f"@{u}" for u in users)
        if self.team_name:
            return f"the {self.team_name} software engineering team ({members})"
        return f"a software engineering team ({members})"

    def build(self, activity_text: str, users: Sequence[str], examples: str = "") -> str:
        parts = [
            INTRO.format(audience=self.describe_audience(users), activity=escape_backticks(activity_text)),
            BULLETS_FORMAT if self.style == "bullets" else EXECUTIVE_FORMAT,
        ]
        if examples:
            parts.append(EXAMPLES_SECTION.format(examples=examples))
        parts.append(RULES)
        if self.primary_orgs and self.style == "bullets":
            orgs = " or ".join(f"{org}/" for org in self.primary_orgs)
            parts.append(SIDE_QUEST_RULE.format(orgs=orgs))
        return "\n".join(parts)
