"""Per-session drafting workspace: one draft, instruction and busy flag per request."""

import threading

from .drafting import draft_response
from .models import DraftResponse, RequestId, RequestItem
from .objections import QUICK_OBJECTIONS, compose_response, empty_toggles

NO_RESPONSE = "[No response provided]"


class RequestBusy(RuntimeError):
    pass


class WorkspaceState:
    """Holds the drafts for one uploaded document.

    Request text never changes; every write to a draft replaces the whole
    body. At most one drafting call may be in flight per request, while
    different requests can be drafted concurrently.
    """

    def __init__(self, document_text: str, requests: list[RequestItem], file_name: str = ""):
        self.document_text = document_text
        self.file_name = file_name
        self.requests = list(requests)
        self._by_id = {r.id: r for r in self.requests}
        self._drafts: dict[RequestId, DraftResponse] = {}
        self._toggles: dict[RequestId, dict[str, bool]] = {}
        self._locks = {r.id: threading.Lock() for r in self.requests}
        self._guard = threading.Lock()

    def request(self, request_id: RequestId) -> RequestItem:
        if request_id not in self._by_id:
            raise KeyError(f"Unknown request id: {request_id!r}")
        return self._by_id[request_id]

    def _draft(self, request_id: RequestId) -> DraftResponse:
        self.request(request_id)
        with self._guard:
            if request_id not in self._drafts:
                self._drafts[request_id] = DraftResponse(request_id=request_id)
            return self._drafts[request_id]

    # -- reads ---------------------------------------------------------------

    def response(self, request_id: RequestId) -> str:
        return self._draft(request_id).body

    def instruction(self, request_id: RequestId) -> str:
        return self._draft(request_id).instruction

    def is_loading(self, request_id: RequestId) -> bool:
        return self._draft(request_id).loading

    def toggles(self, request_id: RequestId) -> dict[str, bool]:
        self.request(request_id)
        return dict(self._toggles.get(request_id) or empty_toggles())

    # -- user edits ----------------------------------------------------------

    def set_response(self, request_id: RequestId, text: str) -> None:
        self._draft(request_id).body = text

    def set_instruction(self, request_id: RequestId, text: str) -> None:
        self._draft(request_id).instruction = text

    def apply_quick_objection(self, request_id: RequestId, label: str) -> str:
        if label not in QUICK_OBJECTIONS:
            raise KeyError(f"Unknown objection: {label!r}")
        self.set_response(request_id, QUICK_OBJECTIONS[label])
        return self.response(request_id)

    def set_toggles(self, request_id: RequestId, **flags: bool) -> str:
        toggles = {**self.toggles(request_id), **flags}
        body = compose_response(toggles)
        self._toggles[request_id] = toggles
        self.set_response(request_id, body)
        return body

    def toggle(self, request_id: RequestId, name: str) -> str:
        current = self.toggles(request_id)
        if name not in current:
            raise KeyError(f"Unknown objection toggle: {name!r}")
        return self.set_toggles(request_id, **{name: not current[name]})

    # -- AI drafting ---------------------------------------------------------

    def refine(self, request_id: RequestId, objection_type: str | None = None, drafter=draft_response) -> str:
        """Run one drafting call for a request and store the result.

        Raises RequestBusy when a call for the same request is already
        running. On any drafting error the previous draft is kept and the
        error propagates.
        """
        item = self.request(request_id)
        lock = self._locks[request_id]
        if not lock.acquire(blocking=False):
            raise RequestBusy(f"Request {request_id} is already being drafted")

        draft = self._draft(request_id)
        try:
            draft.loading = True
            text = drafter(
                item.text,
                current_response=draft.body,
                objection_type=objection_type,
                instruction=draft.instruction,
            )
            draft.body = text
            draft.instruction = ""
            return text
        finally:
            draft.loading = False
            lock.release()

    # -- export --------------------------------------------------------------

    def pairs(self) -> list[tuple[RequestItem, str]]:
        return [(r, self.response(r.id) or NO_RESPONSE) for r in self.requests]
