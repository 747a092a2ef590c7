"""
FastAPI Backend for the Legal Document Analyzer

Accepts a legal document as JSON text, a multipart/form upload, or a raw file
body, has Gemini analyze it, and returns the extracted JSON object.

Run with: uvicorn execution.legal_analyzer.api:app --host 0.0.0.0 --port 3000
"""

import sys
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .analyzer import DocumentAnalyzer
from .api_models import AnalysisResult, DiagnosticResponse, ErrorResponse, HealthResponse
from .config import AnalyzerConfig
from .errors import AnalyzerError
from .model_client import GeminiClient
from .normalizer import normalize_request

logger = logging.getLogger(__name__)

# Standalone-server path and serverless-style path share one handler
ANALYZE_PATHS = ("/analyze", "/api/analyze")
REJECTED_METHODS = ["GET", "PUT", "PATCH", "DELETE"]
DIAGNOSTIC_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def _error_response(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def create_app(config: Optional[AnalyzerConfig] = None, model_client=None) -> FastAPI:
    """
    Build the API application.

    Args:
        config: Process configuration (read from the environment if omitted)
        model_client: Object with generate(parts) -> str (Gemini if omitted)

    Raises:
        ConfigurationError: no API key is configured; the app is not created
    """
    config = config or AnalyzerConfig.from_env()
    model_client = model_client or GeminiClient.from_config(config)
    analyzer = DocumentAnalyzer(model_client)

    app = FastAPI(
        title="Legal Document Analyzer API",
        description="Summarizes legal documents and lists key clauses and relevant laws",
        version=__version__,
    )
    app.state.config = config
    app.state.analyzer = analyzer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AnalyzerError)
    async def analyzer_error_handler(request: Request, exc: AnalyzerError):
        return _error_response(exc.status_code, exc.message, exc.details)

    async def analyze_document(request: Request):
        """Analyze a document supplied as text, form upload, or raw file body."""
        try:
            document = await normalize_request(request, config)
            result = await analyzer.analyze(document)
        except AnalyzerError as e:
            logger.info(f"Analysis request rejected ({type(e).__name__}): {e.message}")
            raise
        except Exception as e:
            logger.exception(f"Error during analysis: {e}")
            raise AnalyzerError("An internal server error occurred.", details=str(e))
        return JSONResponse(content=result)

    async def method_not_allowed():
        return _error_response(405, "Method not allowed")

    async def preflight():
        return Response(status_code=200)

    for index, path in enumerate(ANALYZE_PATHS):
        app.add_api_route(
            path, analyze_document, methods=["POST"],
            include_in_schema=index == 0,
            responses={
                200: {"model": AnalysisResult},
                400: {"model": ErrorResponse},
                413: {"model": ErrorResponse},
                500: {"model": ErrorResponse},
                502: {"model": ErrorResponse},
            },
        )
        app.add_api_route(path, method_not_allowed, methods=REJECTED_METHODS, include_in_schema=False)
        app.add_api_route(path, preflight, methods=["OPTIONS"], include_in_schema=False)

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(status="ok", version=__version__, model=config.model_name)

    async def deployment_test(request: Request):
        """Smoke test for deployments: confirms routing and key presence."""
        logger.info("Test endpoint called")
        return DiagnosticResponse(
            message="Test endpoint is working!",
            timestamp=datetime.now(timezone.utc).isoformat(),
            method=request.method,
            hasApiKey=bool(config.api_key),
            pythonVersion=sys.version.split()[0],
        )

    app.add_api_route(
        "/api/test", deployment_test, methods=DIAGNOSTIC_METHODS,
        response_model=DiagnosticResponse,
    )
    app.add_api_route("/api/test", preflight, methods=["OPTIONS"], include_in_schema=False)

    return app


app = create_app()
