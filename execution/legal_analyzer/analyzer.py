"""
Document analysis pipeline: prompt assembly -> model call -> JSON extraction.
"""

import asyncio
import logging
import time

from .extractor import extract_analysis
from .normalizer import AnalysisRequest
from .prompts import RESULT_KEYS, build_prompt_parts

logger = logging.getLogger(__name__)


class DocumentAnalyzer:
    """
    Runs one normalized document through the model.

    The model client is shared by every request and must not hold
    per-request state.
    """

    def __init__(self, model_client):
        self.model_client = model_client

    async def analyze(self, document: AnalysisRequest) -> dict:
        """
        Analyze a document and return the extracted object verbatim.

        Raises:
            UpstreamUnavailable: the model call failed
            MalformedUpstreamResponse: the reply held no valid JSON object
        """
        start_time = time.time()
        parts = build_prompt_parts(document)

        # The blocking SDK call runs on a worker thread; a client disconnect
        # does not cancel it.
        loop = asyncio.get_running_loop()
        raw_text = await loop.run_in_executor(None, self.model_client.generate, parts)

        result = extract_analysis(raw_text)

        elapsed = (time.time() - start_time) * 1000
        missing = [k for k in RESULT_KEYS if k not in result]
        if missing:
            logger.info(f"Analysis result is missing keys: {', '.join(missing)}")
        logger.info(
            f"Analyzed {document.kind.value} document ({document.size} bytes) in {elapsed:.0f}ms"
        )
        return result
