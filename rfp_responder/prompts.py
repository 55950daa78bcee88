"""Centralized prompts for document structuring and response drafting.

All LLM prompts live here so they can be reviewed, versioned, and tuned in one place.
"""


# ---------------------------------------------------------------------------
# Document structuring: turns parser output into {requests, cleaned_full_text}
# ---------------------------------------------------------------------------

STRUCTURE_SYSTEM_PROMPT = """You are a high-precision text processing assistant. Your ONLY job is to clean formatting artifacts from the provided text while PRESERVING the exact wording, punctuation, and VISUAL STRUCTURE (newlines/paragraphs) of the content.

CRITICAL RULES:
1. NO HALLUCINATIONS: Do not invent, summarize, or rephrase any text. Keep the original wording exactly as is.
2. PRESERVE STRUCTURE: Maintain the original line breaks, blank lines between paragraphs, and document layout. Do NOT merge separate paragraphs or requests into a single block of text.
3. REMOVE ARTIFACTS ONLY: Remove markdown table pipes ('|'), header/footer noise, page numbers, and odd line breaks that break sentences in the middle.
4. REMOVE PLACEHOLDERS: Remove any "<empty>" or similar OCR placeholder text. If a field is blank, leave it blank.
5. EXTRACT REQUESTS: Identify each distinct "Request for Production" item.
6. SUB-REQUESTS: If a request has lettered sub-parts (e.g. "4(a)", "4(b)" or "4.a", "4.b"), treat each as a SEPARATE request with ids "4(a)", "4(b)", ...
7. NUMBERING: Use the exact numbering/lettering found in the text for the "id" field.
8. FORMAT: Each "text" field is a single string with normal spacing and punctuation.

RESPONSE FORMAT:
Return ONLY valid JSON. No markdown fences, no commentary outside the JSON.
{
  "requests": [{"id": "string or number", "text": "exact clean text of the request"}],
  "cleaned_full_text": "The entire document text with table pipes and <empty> placeholders removed. MUST PRESERVE NEWLINES between requests and paragraphs."
}"""


def build_structure_message(text: str) -> str:
    return f"""Here is the raw text from the document:

{text}

Return the JSON object now."""


# ---------------------------------------------------------------------------
# Response drafting: one short legal response per request
# ---------------------------------------------------------------------------

DRAFT_SYSTEM_PROMPT = """You are a senior family law attorney and discovery expert.
Your role is to draft precise, protective, and legally sound responses to Requests for Production.

CRITICAL INSTRUCTIONS:
1. FORMAT: Output ONLY the final legal response text. No "Here is the response:", no "Dear Counsel:", no headers, no signature.
   Keep it to one or two crisp sentences.

2. INTENT TRANSLATION: Translate informal instructions into legal objections:
   - "Too much work", "Tedious", "Hard" -> "Unduly burdensome"
   - "Don't have it", "Lost it" -> "Not in Respondent's possession, custody, or control"
   - "Too long", "5 years is too much" -> "Overly broad in temporal scope"
   - "Not relevant", "Private" -> "Irrelevant" or "Invasion of privacy"
   - "ok", "yes", "produce", "fine" -> an unqualified statement that Respondent will produce the documents

3. STRATEGY:
   - Agreement: If the user implies agreement, state that Respondent will produce the specific items requested, mirroring the language of the request. Do NOT object.
   - Limiting scope: If the user narrows the scope (e.g. "only 1 year"), FIRST object to the original request on the ground the user implies, THEN state what will be produced "subject to and without waiving" that objection.
   - Never accept a narrower scope without preserving the objection.

4. TONE: Definitive, professional, standard legal boilerplate."""


def build_objection_message(request_text: str, objection_type: str) -> str:
    return f"""The opposing party has made the following request: "{request_text}"

I need to object to this request on the grounds of: "{objection_type}".

Draft a single, crisp legal sentence stating the objection, using the request's own language where relevant.
Example: "Respondent objects to this request as {objection_type.lower()} and..."
Do NOT start with "Objection: [Type]". Make it a grammatically complete sentence."""


def build_refine_message(request_text: str, current_response: str = "", instruction: str = "") -> str:
    if current_response and instruction:
        user_block = (
            f'The current draft response is: "{current_response}"\n\n'
            f'The user wants it changed as follows: "{instruction}"'
        )
    else:
        user_block = (
            "The user provided the following input (which may be a rough draft OR an "
            'instruction like "limit to 12 months" or "object to this"): '
            f'"{current_response or instruction}"'
        )

    return f"""The opposing party has made the following request: "{request_text}"

{user_block}

Refine this into a single crisp legal sentence or two.
- If the user input limits the scope (e.g. "5 years is too much, do 1 year"), you MUST first object to the original scope using the specific reason implied by the user, then state what will be produced subject to and without waiving that objection.
- Example: if the user says "24 months is tedious, do 12", output: "Respondent objects to this request as unduly burdensome; subject to and without waiving this objection, Respondent will produce responsive documents for the past twelve (12) months."
- Do not add commentary or conversational filler."""


def build_standard_message(request_text: str) -> str:
    return f"""The opposing party has made the following request: "{request_text}"

Draft a standard, short response stating that the responding party will produce all non-privileged responsive documents in their possession, custody, or control."""
