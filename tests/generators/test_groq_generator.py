"""Tests for the Groq-backed content generator."""

from unittest.mock import patch

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from branchtale.errors import ContentGenerationError
from branchtale.generators.groq import MAX_DIFF_CHARS, GroqContentGenerator, clean_output

DIFF = "diff --git a/retry.py b/retry.py\n+RETRIES = 3\n"


def make_generator(*responses):
    return GroqContentGenerator(api_key="test-key", llm=FakeListChatModel(responses=list(responses)))


def test_generate_branch_name():
    generator = make_generator("`add-retry-logic`\n")

    assert generator.generate_branch_name(DIFF) == "add-retry-logic"


def test_generate_title_keeps_first_line():
    generator = make_generator('"Add retry logic to HTTP client"\nThis title describes the change.')

    assert generator.generate_pr_title(DIFF) == "Add retry logic to HTTP client"


def test_generate_description_keeps_markdown():
    body = "## Summary\n\n- Retry failed requests\n- Configurable attempts"
    generator = make_generator(f"```markdown\n{body}\n```")

    assert generator.generate_pr_description(DIFF) == body


def test_empty_answer_is_returned_as_empty():
    generator = make_generator("   ")

    assert generator.generate_branch_name(DIFF) == ""


def test_backend_failure_raises_generation_error():
    generator = make_generator("unused")

    with patch("langchain_core.runnables.base.RunnableSequence.invoke", side_effect=RuntimeError("rate limited")):
        with pytest.raises(ContentGenerationError) as exc_info:
            generator.generate_pr_title(DIFF)

    assert "rate limited" in str(exc_info.value)


def test_long_diff_is_truncated():
    generator = make_generator("add-retry-logic")
    long_diff = "+x\n" * MAX_DIFF_CHARS

    with patch("langchain_core.runnables.base.RunnableSequence.invoke", return_value="add-retry-logic") as invoke:
        generator.generate_branch_name(long_diff)

    sent = invoke.call_args.args[0]["diff"]
    assert len(sent) == MAX_DIFF_CHARS


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  fix-timeout  ", "fix-timeout"),
        ("'fix-timeout'", "fix-timeout"),
        ("```\nfix-timeout\n```", "fix-timeout"),
        ("", ""),
    ],
)
def test_clean_output(raw, expected):
    assert clean_output(raw, single_line=True) == expected
