"""Extraction prompt rendering from a catalog document type."""

from __future__ import annotations

from docmind.catalog.models import DocumentTypeDefinition

SYSTEM_PROMPT = (
    "You are a mortgage document processing expert. Extract structured data from documents "
    "accurately and return it in JSON format. If a field cannot be found, use null."
)

_FORMAT_RULES = (
    "- Use null for any fields that cannot be found",
    "- For date fields, use YYYY-MM-DD format",
    "- For currency fields, use numeric values without $ or commas",
    "- For boolean fields, use true or false",
    "- Be precise and accurate",
)


def build_extraction_prompt(doc_type: DocumentTypeDefinition, document_text: str) -> str:
    """Render the user prompt listing the fields to extract and the JSON shape to return."""
    lines = [
        f"Extract the following information from this {doc_type.name} document:",
        "",
        "DOCUMENT TEXT:",
        document_text,
        "",
        "FIELDS TO EXTRACT:",
    ]
    for rule in doc_type.fields:
        required = " [REQUIRED]" if rule.required else ""
        lines.append(f"- {rule.name} ({rule.data_type.value}): {rule.description}{required}")

    lines += ["", doc_type.ai_prompt, "", "Return the data in JSON format with the following structure:", "{"]
    last = len(doc_type.fields) - 1
    for i, rule in enumerate(doc_type.fields):
        comma = "," if i < last else ""
        lines.append(f'  "{rule.name}": <extracted_value>{comma}')
    lines += ["}", "", "IMPORTANT:", *_FORMAT_RULES]
    return "\n".join(lines) + "\n"
