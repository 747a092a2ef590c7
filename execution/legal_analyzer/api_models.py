"""
Pydantic models for the Legal Document Analyzer FastAPI backend.
"""

from typing import Optional, Union
from pydantic import BaseModel, ConfigDict


class AnalyzeTextRequest(BaseModel):
    """JSON request body for the analyze endpoint."""
    documentText: Optional[str] = None


class AnalysisResult(BaseModel):
    """Expected shape of a successful analysis.

    Advisory only: the endpoint returns the model's object verbatim, so keys
    may be missing and extra keys pass through.
    """
    model_config = ConfigDict(extra="allow")

    summary: Optional[str] = None
    keyClauses: Optional[Union[str, list[str]]] = None
    relevantLaws: Optional[Union[str, list[str]]] = None


class ErrorResponse(BaseModel):
    """Error body for every failed request."""
    error: str
    details: Optional[str] = None


class HealthResponse(BaseModel):
    """Response body for health check."""
    status: str
    version: str
    model: str


class DiagnosticResponse(BaseModel):
    """Response body for the deployment smoke-test endpoint."""
    message: str
    timestamp: str
    method: str
    hasApiKey: bool
    pythonVersion: str
