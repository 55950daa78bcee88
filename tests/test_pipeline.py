"""
Tests for the extraction fallback chain.

Adapters are patched on the pipeline module so each branch can be forced.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from rfp_responder import pipeline
from rfp_responder.llm import LLMError
from rfp_responder.models import RequestItem
from rfp_responder.pipeline import process_document
from rfp_responder.reducto import ReductoError

RFP_TEXT = "REQUEST NO. 1\nProduce bank statements.\nREQUEST NO. 2\nProduce tax returns."


@pytest.fixture
def keys():
    """Configure both adapters; individual tests patch the calls themselves."""
    with patch.object(pipeline, "REDUCTO_API_KEY", "reducto-key"), \
            patch.object(pipeline, "ANTHROPIC_API_KEY", "anthropic-key"):
        yield


class TestLocalPath:
    """No Reducto key, or a file type Reducto is not used for."""

    def test_text_file_without_keys(self):
        with patch.object(pipeline, "REDUCTO_API_KEY", ""), \
                patch.object(pipeline, "parse_document") as remote:
            result = process_document(RFP_TEXT.encode(), "rfp.txt", "text/plain")

        remote.assert_not_called()
        assert result.source == "local"
        assert result.structured_by == "regex"
        assert result.text == RFP_TEXT
        assert [r.id for r in result.requests] == [1, 2]

    def test_text_file_skips_reducto_even_with_key(self, keys):
        with patch.object(pipeline, "parse_document") as remote, \
                patch.object(pipeline, "structure_document") as structure:
            result = process_document(b"REQUEST NO. 3 Produce deeds.", "rfp.txt", "text/plain")

        remote.assert_not_called()
        structure.assert_not_called()
        assert result.requests == [RequestItem(id=3, text="Produce deeds.")]

    def test_crlf_text_is_normalized(self):
        with patch.object(pipeline, "REDUCTO_API_KEY", ""):
            result = process_document(b"  REQUEST NO. 1\r\nProduce leases.\r\n", "rfp.txt")

        assert result.text == "REQUEST NO. 1\nProduce leases."

    def test_local_extraction_error_propagates(self):
        with patch.object(pipeline, "REDUCTO_API_KEY", ""):
            with pytest.raises(ValueError):
                process_document(b"old word file", "rfp.doc")


class TestReductoPath:
    """Reducto configured for a PDF upload."""

    def test_reducto_failure_falls_back_to_local(self, keys):
        with patch.object(pipeline, "parse_document", side_effect=ReductoError("Reducto upload failed: 500")), \
                patch.object(pipeline, "extract_text", return_value=RFP_TEXT) as local:
            result = process_document(b"%PDF", "rfp.pdf", "application/pdf")

        local.assert_called_once()
        assert result.source == "local"
        assert len(result.requests) == 2

    def test_reducto_timeout_falls_back_to_local(self, keys):
        with patch.object(pipeline, "parse_document", side_effect=requests.Timeout("slow")), \
                patch.object(pipeline, "extract_text", return_value=RFP_TEXT):
            result = process_document(b"%PDF", "rfp.pdf", "application/pdf")

        assert result.source == "local"

    def test_reducto_without_llm_key_uses_regex(self):
        with patch.object(pipeline, "REDUCTO_API_KEY", "k"), \
                patch.object(pipeline, "ANTHROPIC_API_KEY", ""), \
                patch.object(pipeline, "parse_document", return_value=RFP_TEXT), \
                patch.object(pipeline, "structure_document") as structure:
            result = process_document(b"%PDF", "rfp.pdf", "application/pdf")

        structure.assert_not_called()
        assert result.source == "reducto"
        assert result.structured_by == "regex"
        assert [r.text for r in result.requests] == ["Produce bank statements.", "Produce tax returns."]

    def test_llm_requests_and_cleaned_text_preferred(self, keys):
        llm_requests = [RequestItem(id="4(a)", text="Checking."), RequestItem(id="4(b)", text="Savings.")]
        with patch.object(pipeline, "parse_document", return_value="| REQUEST NO. 4 | <empty>"), \
                patch.object(pipeline, "structure_document", return_value=(llm_requests, "REQUEST NO. 4 ...")):
            result = process_document(b"%PDF", "rfp.pdf", "application/pdf")

        assert result.structured_by == "llm"
        assert result.requests == llm_requests
        assert result.text == "REQUEST NO. 4 ..."

    def test_llm_failure_uses_regex_on_uncleaned_text(self, keys):
        with patch.object(pipeline, "parse_document", return_value=RFP_TEXT), \
                patch.object(pipeline, "structure_document", side_effect=LLMError("bad json")):
            result = process_document(b"%PDF", "rfp.pdf", "application/pdf")

        assert result.source == "reducto"
        assert result.structured_by == "regex"
        assert result.text == RFP_TEXT
        assert len(result.requests) == 2

    def test_llm_empty_requests_uses_regex(self, keys):
        with patch.object(pipeline, "parse_document", return_value=RFP_TEXT), \
                patch.object(pipeline, "structure_document", return_value=([], "")):
            result = process_document(b"%PDF", "rfp.pdf", "application/pdf")

        assert result.structured_by == "regex"
        assert [r.id for r in result.requests] == [1, 2]

    def test_progress_callback_receives_steps(self, keys):
        steps = []
        with patch.object(pipeline, "parse_document", return_value=RFP_TEXT), \
                patch.object(pipeline, "structure_document", return_value=([], "")):
            process_document(b"%PDF", "rfp.pdf", "application/pdf",
                             progress_callback=lambda s, t, m: steps.append((s, t)))

        assert steps == [(1, 2), (2, 2)]


class TestMalformedReductoResponses:
    """Unexpected Reducto payloads still reach the local fallback."""

    def _post(self, *payloads):
        responses = []
        for payload in payloads:
            resp = MagicMock()
            resp.ok = True
            resp.status_code = 200
            resp.json.return_value = payload
            responses.append(resp)
        return patch("rfp_responder.reducto.requests.post", side_effect=responses)

    def test_upload_returning_list(self, keys):
        with self._post(["oops"]), \
                patch.object(pipeline, "extract_text", return_value=RFP_TEXT):
            result = process_document(b"%PDF", "rfp.pdf", "application/pdf")

        assert result.source == "local"
        assert len(result.requests) == 2

    def test_parse_returning_list(self, keys):
        with self._post({"file_id": "f"}, ["oops"]), \
                patch.object(pipeline, "extract_text", return_value=RFP_TEXT):
            result = process_document(b"%PDF", "rfp.pdf", "application/pdf")

        assert result.source == "local"

    def test_null_chunk_content_does_not_fail(self):
        payload = {"result": {"type": "full", "chunks": [{"content": None}, {"content": RFP_TEXT}]}}
        with patch.object(pipeline, "REDUCTO_API_KEY", "k"), \
                patch.object(pipeline, "ANTHROPIC_API_KEY", ""), \
                self._post({"file_id": "f"}, payload):
            result = process_document(b"%PDF", "rfp.pdf", "application/pdf")

        assert result.source == "reducto"
        assert [r.id for r in result.requests] == [1, 2]
