"""Tests for ``activity_summary.prompt``."""

import pytest

from activity_summary.prompt import EXAMPLE_MAX_LINES, PromptBuilder, load_examples

ACTIVITY = "=== COMMITS ===\n\nRepository: org/repo (1 commits)\n- use `pathlib` everywhere\n"


class TestAudience:

    def test_single_engineer(self):
        assert PromptBuilder().describe_audience(["octocat"]) == "a software engineer (@octocat)"

    def test_unnamed_team(self):
        assert PromptBuilder().describe_audience(["alice", "bob"]) == "a software engineering team (@alice, @bob)"

    def test_named_team(self):
        audience = PromptBuilder(team_name="platform").describe_audience(["alice", "bob"])
        assert audience == "the platform software engineering team (@alice, @bob)"


class TestBuild:

    def test_bullets_prompt(self):
        prompt = PromptBuilder().build(ACTIVITY, ["octocat"])

        assert "monthly work activity summaries for a software engineer (@octocat)" in prompt
        assert "side-quests:" in prompt
        assert "Do NOT include markdown code blocks or formatting." in prompt
        assert "Here are some real examples" not in prompt

    def test_activity_backticks_escaped(self):
        prompt = PromptBuilder().build(ACTIVITY, ["octocat"])

        assert "- use \\`pathlib\\` everywhere" in prompt
        assert "use `pathlib`" not in prompt

    def test_executive_prompt_has_five_questions(self):
        prompt = PromptBuilder(style="executive").build(ACTIVITY, ["alice", "bob"])

        for number in range(1, 6):
            assert f"\n{number}. " in prompt
        assert "side-quests:" not in prompt
        assert "meta-commentary" in prompt

    def test_primary_orgs_rule(self):
        prompt = PromptBuilder(primary_orgs=["ethereum", "ethpandaops"]).build(ACTIVITY, ["octocat"])
        assert "outside the ethereum/ or ethpandaops/ organization should be treated as side quests" in prompt

    def test_examples_included(self):
        prompt = PromptBuilder().build(ACTIVITY, ["octocat"], examples="\n\nExample from 2025-09.txt:\nold\n\n---\n")
        assert "Here are some real examples for reference:" in prompt
        assert "Example from 2025-09.txt:" in prompt

    def test_braces_in_activity_are_kept(self):
        prompt = PromptBuilder().build("- handle {placeholder} values", ["octocat"])
        assert "- handle {placeholder} values" in prompt

    def test_unknown_style(self):
        with pytest.raises(ValueError):
            PromptBuilder(style="haiku")


class TestLoadExamples:

    def test_missing_directory(self, tmp_path):
        assert load_examples(str(tmp_path / "none")) == ""

    def test_reads_canonical_files_truncated(self, tmp_path):
        (tmp_path / "2025-08.txt").write_text("august\n")
        (tmp_path / "2025-09.txt").write_text("\n".join(f"line {i}" for i in range(150)) + "\n")
        (tmp_path / "2025-09_openai_gpt-4o.txt").write_text("draft\n")
        (tmp_path / "notes.md").write_text("ignored\n")

        examples = load_examples(str(tmp_path))

        assert examples.index("Example from 2025-08.txt:") < examples.index("Example from 2025-09.txt:")
        assert f"line {EXAMPLE_MAX_LINES - 1}" in examples
        assert f"line {EXAMPLE_MAX_LINES}" not in examples
        assert "draft" not in examples
        assert "ignored" not in examples
        assert examples.count("---") == 2

    def test_excludes_month_being_generated(self, tmp_path):
        (tmp_path / "2025-09.txt").write_text("september\n")
        (tmp_path / "2025-10.txt").write_text("previous run\n")

        examples = load_examples(str(tmp_path), exclude_month="2025-10")

        assert "september" in examples
        assert "previous run" not in examples

    def test_non_utf8_example_is_read_with_replacement(self, tmp_path):
        (tmp_path / "2025-09.txt").write_bytes(b"caf\xe9 summary\nsecond line\n")

        examples = load_examples(str(tmp_path))

        assert "caf\ufffd summary" in examples
        assert "second line" in examples
