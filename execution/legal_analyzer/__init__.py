"""
Legal Document Analyzer - Gemini-backed legal document summaries

This module provides:
- Input normalization for JSON, form/multipart, and raw file uploads
- A fixed analysis prompt (summary, key clauses, relevant laws)
- A thin Gemini client (one call per request, no retries)
- Extraction of the JSON object from the model's free-form reply

The FastAPI app lives in `api.py` and is not imported here, since building it
requires GEMINI_API_KEY.
"""

__version__ = "0.1.0"

from .config import AnalyzerConfig
from .normalizer import AnalysisRequest, DocumentKind, resolve_document, normalize_request
from .prompts import ANALYSIS_INSTRUCTION, build_prompt_parts
from .extractor import extract_analysis
from .model_client import GeminiClient
from .analyzer import DocumentAnalyzer

__all__ = [
    "AnalyzerConfig",
    "AnalysisRequest",
    "DocumentKind",
    "resolve_document",
    "normalize_request",
    "ANALYSIS_INSTRUCTION",
    "build_prompt_parts",
    "extract_analysis",
    "GeminiClient",
    "DocumentAnalyzer",
]
