"""Deterministic objection boilerplate for the toggle-based response generator."""

import re

# Enumeration order fixes sentence order in composed responses
OBJECTION_SENTENCES = {
    "overly_broad": "Respondent objects that this request is overly broad in time and scope.",
    "unduly_burdensome": "Respondent objects that this request is unduly burdensome.",
    "not_proportional": "Respondent objects that this request is not proportional to the needs of the case.",
    "vague": "Respondent objects that this request is vague or ambiguous.",
    "outside_control": (
        "Respondent objects that this request seeks documents not in Respondent's "
        "possession, custody, or control."
    ),
    "irrelevant": (
        "Respondent objects that this request seeks information that is not relevant "
        "to the issues in this matter."
    ),
    "confidentiality": "Respondent objects on grounds of confidentiality and privacy.",
}

STANDARD_RESPONSE = (
    "Respondent will produce non-privileged documents in Respondent's possession, "
    "custody, or control that are responsive to this request."
)

TRANSITION = "Subject to and without waiving this objection, "

# One-click objections in the workspace; applying one replaces the draft
QUICK_OBJECTIONS = {
    "Overly Broad": "Objection. This request is overly broad and lacks reasonable limitation in time and scope.",
    "Unduly Burdensome": (
        "Objection. This request is unduly burdensome and oppressive, seeking documents "
        "that are not readily available."
    ),
    "Not Proportional": "Objection. This request is not proportional to the needs of the case.",
    "Vague": (
        "Objection. This request is vague, ambiguous, and fails to identify the documents "
        "with reasonable particularity."
    ),
    "Outside Control": (
        "Objection. This request seeks documents that are not in the responding party's "
        "possession, custody, or control."
    ),
    "Irrelevant": "Objection. This request seeks information that is not relevant to the subject matter of this action.",
    "Confidentiality": "Objection. This request seeks confidential and proprietary information.",
}

_PRODUCTION_PREFIXES = [
    (("bank",), "bank_statement"),
    (("tax",), "tax_return"),
    (("pay", "income"), "paystub"),
    (("credit card",), "cc_statement"),
    (("investment", "brokerage"), "investment_stmt"),
    (("mortgage",), "mortgage_stmt"),
    (("insurance",), "insurance_policy"),
    (("medical",), "medical_record"),
    (("communication", "email", "text"), "communication"),
]


def empty_toggles() -> dict[str, bool]:
    return {name: False for name in OBJECTION_SENTENCES}


def _validate(toggles: dict) -> None:
    unknown = set(toggles) - set(OBJECTION_SENTENCES)
    if unknown:
        raise KeyError(f"Unknown objection toggle(s): {', '.join(sorted(unknown))}")


def compose_response(toggles: dict[str, bool]) -> str:
    """Build a response from the active objection toggles.

    Same toggles always give the same text; with none active the result is
    the standard production sentence.
    """
    _validate(toggles)
    active = [sentence for name, sentence in OBJECTION_SENTENCES.items() if toggles.get(name)]
    if not active:
        return STANDARD_RESPONSE
    return " ".join(active) + " " + TRANSITION + STANDARD_RESPONSE


def toggle(toggles: dict[str, bool], name: str) -> dict[str, bool]:
    """Return a copy of the toggles with one flag flipped."""
    _validate({name: True})
    updated = {**empty_toggles(), **toggles}
    updated[name] = not updated[name]
    return updated


def suggest_production_filename(request_text: str) -> str:
    """Guess a produced-document file name from keywords in the request."""
    lower = request_text.lower()
    for keywords, prefix in _PRODUCTION_PREFIXES:
        if any(kw in lower for kw in keywords):
            return f"{prefix}_001.pdf"
    return "document_001.pdf"


def parse_toggles(raw: dict) -> dict[str, bool]:
    """Accept camelCase (overlyBroad) or snake_case toggle names from a client."""
    toggles = {}
    for key, value in (raw or {}).items():
        name = re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()
        toggles[name] = bool(value)
    _validate(toggles)
    return toggles
