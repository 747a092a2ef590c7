"""
Shared fixtures and test utilities for Legal Document Analyzer tests.

Provides a stub model client, sample documents, and app fixtures so that all
tests run without an API key or network access.
"""

import os
import sys
import json
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Path setup - ensure the execution package is importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# The module-level app in api.py requires a key at import time
os.environ.setdefault("GEMINI_API_KEY", "test-key")

# ---------------------------------------------------------------------------
# Sample documents and model replies
# ---------------------------------------------------------------------------
SAMPLE_AGREEMENT = """
SOFTWARE LICENSE AGREEMENT

This Software License Agreement ("Agreement") is entered into as of January 1, 2024
by and between TechCorp Inc., a Delaware corporation ("Licensor"), and ClientCo LLC
("Licensee").

Section 2.1 Grant of License. Licensor grants Licensee a non-exclusive,
non-transferable license to use the Software.

Section 4.2 Termination for Convenience. Either party may terminate this Agreement
upon sixty (60) days written notice.

Section 8.1 Governing Law. This Agreement shall be governed by the laws of the
State of Delaware.
"""

SAMPLE_RESULT = {
    "summary": "A software license between TechCorp and ClientCo.",
    "keyClauses": [
        "Section 2.1 Grant of License",
        "Section 4.2 Termination for Convenience",
    ],
    "relevantLaws": ["Laws of the State of Delaware"],
}

# Smallest valid PDF header; content is opaque to the service
SAMPLE_PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"


class StubModelClient:
    """Records prompt parts and replies with a canned text or error."""

    def __init__(self, reply: str = None, error: Exception = None):
        self.reply = reply if reply is not None else json.dumps(SAMPLE_RESULT)
        self.error = error
        self.calls = []

    def generate(self, parts):
        self.calls.append(parts)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def sample_agreement():
    """Return the sample agreement text."""
    return SAMPLE_AGREEMENT


@pytest.fixture
def stub_model():
    """Return a stub model client that answers with SAMPLE_RESULT."""
    return StubModelClient()


@pytest.fixture
def analyzer_config():
    """Return a config with a 1 KiB upload limit for size tests."""
    from execution.legal_analyzer.config import AnalyzerConfig
    return AnalyzerConfig(api_key="test-key", max_upload_bytes=1024)


@pytest.fixture
def make_client(analyzer_config):
    """Factory returning a TestClient around an app with the given stub model."""
    from fastapi.testclient import TestClient
    from execution.legal_analyzer.api import create_app

    def _make(model_client=None, config=None):
        app = create_app(config or analyzer_config, model_client or StubModelClient())
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client, stub_model):
    """Return a TestClient whose model replies with SAMPLE_RESULT."""
    return make_client(stub_model)
