"""
Tests for drafting prompt selection and the drafting call.
"""

from unittest.mock import patch

import pytest

from rfp_responder import drafting
from rfp_responder.drafting import build_draft_prompt, draft_response
from rfp_responder.prompts import DRAFT_SYSTEM_PROMPT

REQUEST = "Produce all federal tax returns for the past five years."


class TestBuildDraftPrompt:
    """Tests for build_draft_prompt branch selection."""

    def test_objection_branch(self):
        prompt = build_draft_prompt(REQUEST, objection_type="Unduly Burdensome")

        assert 'grounds of: "Unduly Burdensome"' in prompt
        assert "unduly burdensome" in prompt
        assert REQUEST in prompt

    def test_objection_wins_over_draft(self):
        prompt = build_draft_prompt(REQUEST, current_response="ok", objection_type="Vague")

        assert 'grounds of: "Vague"' in prompt
        assert '"ok"' not in prompt

    def test_refine_branch_with_draft(self):
        prompt = build_draft_prompt(REQUEST, current_response="5 years is too much, do 1")

        assert '"5 years is too much, do 1"' in prompt
        assert "subject to and without waiving" in prompt

    def test_refine_branch_with_instruction_and_draft(self):
        prompt = build_draft_prompt(
            REQUEST,
            current_response="Respondent will produce the returns.",
            instruction="don't have 2019",
        )

        assert "Respondent will produce the returns." in prompt
        assert "don't have 2019" in prompt

    def test_standard_branch(self):
        prompt = build_draft_prompt(REQUEST, current_response="  ", instruction="")

        assert "non-privileged responsive documents" in prompt

    def test_system_prompt_forbids_preamble(self):
        assert '"Dear Counsel:"' in DRAFT_SYSTEM_PROMPT
        assert "one or two crisp sentences" in DRAFT_SYSTEM_PROMPT
        assert "unduly burdensome" in DRAFT_SYSTEM_PROMPT.lower()


class TestDraftResponse:
    """Tests for draft_response."""

    def test_calls_claude_with_drafting_prompts(self):
        with patch.object(drafting, "complete", return_value="Respondent objects.") as complete:
            text = draft_response(REQUEST, objection_type="Unduly Burdensome")

        assert text == "Respondent objects."
        args, kwargs = complete.call_args
        assert args[0] == DRAFT_SYSTEM_PROMPT
        assert "Unduly Burdensome" in args[1]
        assert kwargs["temperature"] == 0.2

    def test_blank_request_rejected(self):
        with pytest.raises(ValueError):
            draft_response("   ")
