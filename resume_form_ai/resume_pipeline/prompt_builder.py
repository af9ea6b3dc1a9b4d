"""Instruction prompt for line-oriented résumé extraction."""

from resume_form_ai.schemas.form_record import FORM_FIELD_KEYS

RECORD_SEPARATOR = "::"

RESUME_EXTRACTION_PROMPT = """Extract information from the following resume text. Respond with key-value pairs, one per line, using '{separator}' as a separator.
Example:
firstName{separator}John
lastName{separator}Doe
email{separator}john.doe@example.com
skills{separator}JavaScript,React,Node.js,HTML,CSS
employmentStatus{separator}Employed

The keys must be: {keys}.
- For 'employmentStatus', determine if they are currently employed. If the latest job has an end date in the past, return 'Unemployed', otherwise 'Employed'.
- For 'skills', return a single comma-separated list.
- For 'languages', return the primary language, or the first from a list.
- If a value is not found, omit the key-value pair.
- Do not wrap the answer in markdown or add any other text.

Resume Text:
---
"""


def build_extraction_prompt(resume_text: str) -> str:
    """Fixed instructions followed by the résumé text, appended verbatim."""
    header = RESUME_EXTRACTION_PROMPT.format(
        separator=RECORD_SEPARATOR,
        keys=", ".join(FORM_FIELD_KEYS),
    )
    return header + (resume_text or "")
