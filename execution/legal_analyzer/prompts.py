"""
Prompt assembly for legal document analysis.

The instruction text is a fixed contract with the response extractor: it asks
for ONLY a JSON object with exactly three keys. Do not edit it.
"""

from dataclasses import dataclass
from typing import Union

from .normalizer import AnalysisRequest, DocumentKind

ANALYSIS_INSTRUCTION = """You are a specialized legal document analyzer. Analyze the provided document meticulously.
Respond ONLY with a valid JSON object with three keys: "summary", "keyClauses", and "relevantLaws".
- "summary": Provide a concise, professional summary of the document's purpose and key terms.
- "keyClauses": Identify and list the most critical clauses.
- "relevantLaws": List any applicable laws or legal statutes mentioned or implied.

Do not include any text, markdown, or formatting outside of the JSON object."""

RESULT_KEYS = ("summary", "keyClauses", "relevantLaws")


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class InlineDataPart:
    """Binary document sent inline; the SDK base64-encodes it on the wire."""
    data: bytes
    mime_type: str


PromptPart = Union[TextPart, InlineDataPart]


def build_prompt_parts(document: AnalysisRequest) -> list[PromptPart]:
    """Return [content part, instruction part] for one document."""
    if document.kind == DocumentKind.FILE:
        content_part = InlineDataPart(data=document.content, mime_type=document.media_type)
    else:
        content_part = TextPart(text=document.content)

    return [content_part, TextPart(text=ANALYSIS_INSTRUCTION)]
