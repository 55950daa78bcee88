"""Data classes for the extraction and drafting workflow."""

from dataclasses import dataclass, field
from typing import Union

RequestId = Union[int, str]


@dataclass(frozen=True)
class RequestItem:
    id: RequestId
    text: str

    def to_dict(self) -> dict:
        return {"id": self.id, "text": self.text}


@dataclass
class DraftResponse:
    request_id: RequestId
    body: str = ""
    instruction: str = ""  # pending user instruction, cleared after a draft
    loading: bool = False


@dataclass
class ExtractionResult:
    text: str
    requests: list[RequestItem] = field(default_factory=list)
    source: str = "local"         # "reducto" or "local"
    structured_by: str = "regex"  # "llm" or "regex"

    def to_dict(self) -> dict:
        return {
            "success": True,
            "text": self.text,
            "requests": [r.to_dict() for r in self.requests],
        }
