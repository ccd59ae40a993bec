"""Shared test fixtures.

Sample GitHub search items shaped like the real API responses, and an
isolated environment: every test runs in its own temporary working
directory with the tool's variables unset, so no real ``.env`` file or
token is ever picked up.
"""

import pytest
import requests

ENV_VARS = (
    "GITHUB_TOKEN",
    "OPENROUTER_TOKEN",
    "GITHUB_USERNAME",
    "OPENROUTER_MODELS",
    "OPENROUTER_MODEL",
    "TEAM_NAME",
    "PRIMARY_ORGS",
    "GITHUB_API_URL",
    "OPENROUTER_URL",
    "ACTIVITY_TMP_DIR",
    "ACTIVITY_SUMMARIES_DIR",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        # setenv first so teardown restores the variable even if a test exports it
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def make_commit(repo, message, sha="abc123", login="octocat", date="2024-02-10T12:00:00Z"):
    return {
        "sha": sha,
        "html_url": f"https://github.com/{repo}/commit/{sha}",
        "author": {"login": login},
        "commit": {"message": message, "author": {"name": login.title(), "date": date}},
        "repository": {"full_name": repo},
    }


def make_issue(repo, number, title, state="open", login="octocat", pr=False):
    kind = "pull" if pr else "issues"
    return {
        "number": number,
        "title": title,
        "state": state,
        "html_url": f"https://github.com/{repo}/{kind}/{number}",
        "repository_url": f"https://api.github.com/repos/{repo}",
        "created_at": "2024-02-11T09:30:00Z",
        "user": {"login": login},
    }


def make_response(status_code, body):
    """Build a real ``requests.Response`` carrying ``body``."""
    response = requests.Response()
    response.status_code = status_code
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    return response


@pytest.fixture
def commit_item():
    return make_commit


@pytest.fixture
def issue_item():
    return make_issue


@pytest.fixture
def http_response():
    return make_response
