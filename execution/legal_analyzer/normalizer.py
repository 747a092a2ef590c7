"""
Input Normalizer

Resolves one inbound analysis request (JSON body, form/multipart body, or a
raw file upload) into exactly one AnalysisRequest: either document text or a
document file with its media type.

Precedence: a file wins over text; text must be non-empty after trimming.
"""

import json
import logging
import mimetypes
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from fastapi import Request
from pydantic import ValidationError
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from .api_models import AnalyzeTextRequest
from .config import AnalyzerConfig
from .errors import InvalidInput, NoContent, PayloadTooLarge

logger = logging.getLogger(__name__)

TEXT_FIELD = "documentText"
FILE_FIELD = "documentFile"
FILENAME_HEADER = "x-filename"

FORM_MEDIA_TYPES = frozenset({"multipart/form-data", "application/x-www-form-urlencoded"})
# One spooled file per field; extra parts are a malformed form
MAX_FORM_FILES = 2
# Headroom over the file limit for part headers, boundaries and the text field
FORM_OVERHEAD_BYTES = 64 * 1024

# Raw uploads the model accepts as inline data
RAW_UPLOAD_TYPES = frozenset({"application/pdf"})
RAW_UPLOAD_PREFIXES = ("text/", "image/")

DEFAULT_MEDIA_TYPE = "application/octet-stream"


class DocumentKind(str, Enum):
    TEXT = "text"
    FILE = "file"


@dataclass(frozen=True)
class AnalysisRequest:
    """A normalized document: text, or file bytes plus media type."""
    kind: DocumentKind
    content: Union[str, bytes]
    media_type: Optional[str] = None
    filename: Optional[str] = None

    @property
    def size(self) -> int:
        if self.kind == DocumentKind.TEXT:
            return len(self.content.encode("utf-8"))
        return len(self.content)


def resolve_document(
    text: Optional[str] = None,
    file_bytes: Optional[bytes] = None,
    media_type: Optional[str] = None,
    filename: Optional[str] = None,
    max_file_bytes: Optional[int] = None,
) -> AnalysisRequest:
    """
    Apply the file-over-text precedence rule.

    Args:
        text: Pasted document text, if any
        file_bytes: Uploaded file content, if any (empty counts as absent)
        media_type: Declared media type of the file
        filename: Original filename, used to guess a missing media type
        max_file_bytes: Upper bound on file size (None disables the check)

    Returns:
        AnalysisRequest of kind FILE or TEXT

    Raises:
        PayloadTooLarge: file exceeds max_file_bytes
        NoContent: no file and no non-blank text
    """
    if file_bytes:
        if max_file_bytes is not None and len(file_bytes) > max_file_bytes:
            raise PayloadTooLarge(len(file_bytes), max_file_bytes)
        return AnalysisRequest(
            kind=DocumentKind.FILE,
            content=file_bytes,
            media_type=media_type or _guess_media_type(filename),
            filename=filename,
        )

    if text is not None and text.strip():
        return AnalysisRequest(kind=DocumentKind.TEXT, content=text)

    raise NoContent()


async def normalize_request(request: Request, config: AnalyzerConfig) -> AnalysisRequest:
    """Detect the request shape from its Content-Type and resolve the document."""
    content_type = request.headers.get("content-type")
    if not content_type:
        # A bare POST carries no document at all
        body = await _read_body(request, config.max_upload_bytes)
        if not body:
            raise NoContent()
        raise InvalidInput("Missing Content-Type header.")

    media_type = _parse_media_type(content_type)

    if media_type == "application/json":
        return await _from_json(request, config)
    if media_type in FORM_MEDIA_TYPES:
        return await _from_form(request, config)
    if media_type in RAW_UPLOAD_TYPES or media_type.startswith(RAW_UPLOAD_PREFIXES):
        return await _from_raw_upload(request, media_type, config)

    raise InvalidInput("Unsupported content type.", details=content_type)


def _parse_media_type(content_type: str) -> str:
    media_type = content_type.split(";", 1)[0].strip().lower()
    main, sep, sub = media_type.partition("/")
    if not sep or not main or not sub:
        raise InvalidInput("Malformed Content-Type header.", details=content_type)
    return media_type


def _guess_media_type(filename: Optional[str]) -> str:
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return DEFAULT_MEDIA_TYPE


def _check_declared_length(request: Request, limit: int) -> None:
    """Reject a body whose Content-Length already exceeds the limit."""
    declared = request.headers.get("content-length")
    if declared is None:
        return
    try:
        declared_size = int(declared)
    except ValueError:
        raise InvalidInput("Malformed Content-Length header.", details=declared)
    if declared_size > limit:
        raise PayloadTooLarge(declared_size, limit)


async def _read_body(request: Request, limit: int) -> bytes:
    """Stream the request body, stopping once it passes the limit."""
    _check_declared_length(request, limit)

    received = bytearray()
    async for chunk in request.stream():
        received.extend(chunk)
        if len(received) > limit:
            raise PayloadTooLarge(len(received), limit)
    return bytes(received)


async def _from_json(request: Request, config: AnalyzerConfig) -> AnalysisRequest:
    raw = await _read_body(request, config.max_upload_bytes)
    try:
        payload = json.loads(raw) if raw.strip() else {}
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidInput("Request body is not valid JSON.", details=str(e))

    if not isinstance(payload, dict):
        raise InvalidInput("Request body must be a JSON object.")

    try:
        body = AnalyzeTextRequest.model_validate(payload)
    except ValidationError as e:
        raise InvalidInput("Invalid request body.", details=str(e))

    return resolve_document(text=body.documentText)


async def _from_form(request: Request, config: AnalyzerConfig) -> AnalysisRequest:
    # Refuse oversized bodies before Starlette spools them to disk
    _check_declared_length(request, config.max_upload_bytes + FORM_OVERHEAD_BYTES)

    try:
        form = await request.form(max_files=MAX_FORM_FILES)
    except (MultiPartException, HTTPException, ValueError) as e:
        raise InvalidInput("Malformed form data.", details=getattr(e, "detail", None) or str(e))

    # Spooled upload files are released on every exit path
    try:
        upload = form.get(FILE_FIELD)
        if upload == "":
            upload = None
        if upload is not None and not isinstance(upload, UploadFile):
            raise InvalidInput(f"Field '{FILE_FIELD}' must be a file upload.")

        file_bytes = None
        file_type = None
        filename = None
        if upload is not None:
            file_bytes = await _read_bounded(upload, config.max_upload_bytes)
            file_type = upload.content_type
            filename = upload.filename
            if not file_bytes:
                logger.debug(f"Ignoring empty '{FILE_FIELD}' part ({filename!r})")

        text = form.get(TEXT_FIELD)
        if text is not None and not isinstance(text, str):
            if not file_bytes:
                raise InvalidInput(f"Field '{TEXT_FIELD}' must be a text field.")
            text = None

        return resolve_document(
            text=text,
            file_bytes=file_bytes,
            media_type=file_type,
            filename=filename,
            max_file_bytes=config.max_upload_bytes,
        )
    finally:
        await form.close()


async def _read_bounded(upload: UploadFile, limit: int) -> bytes:
    """Read an upload, stopping one byte past the limit."""
    data = await upload.read(limit + 1)
    if len(data) > limit:
        raise PayloadTooLarge(upload.size or len(data), limit)
    return data


async def _from_raw_upload(
    request: Request, media_type: str, config: AnalyzerConfig,
) -> AnalysisRequest:
    limit = config.max_upload_bytes
    body = await _read_body(request, limit)

    return resolve_document(
        file_bytes=body,
        media_type=media_type,
        filename=request.headers.get(FILENAME_HEADER),
        max_file_bytes=limit,
    )
