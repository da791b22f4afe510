# services/analyze_service.py
from __future__ import annotations

import os
import json
import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from models.analyze_model import AnalysisResult

logger = logging.getLogger(__name__)

# ---- upstream advice endpoint ------------------------------------------------
ADVICE_API_URL = os.getenv(
    "ADVICE_API_URL", "https://nitinat-right-here.hf.space/getadvice"
)

INVALID_REQUEST_MESSAGE = "Invalid request: text is required"
UPSTREAM_ERROR_MESSAGE = "Failed to analyze diary entry"


# =============================================================================
# errors
# =============================================================================
class AnalyzeError(Exception):
    """Error with a message that is safe to show to the caller."""
    status_code = 500
    code = "ANALYZE_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(AnalyzeError):
    status_code = 400
    code = "INVALID_REQUEST"

    def __init__(self, message: str = INVALID_REQUEST_MESSAGE):
        super().__init__(message)


class UpstreamError(AnalyzeError):
    status_code = 500
    code = "UPSTREAM_ERROR"

    def __init__(self, message: str = UPSTREAM_ERROR_MESSAGE):
        super().__init__(message)


# =============================================================================
# outbound call
# =============================================================================
class AdviceClient:
    """
    Single-shot client for the hosted advice model.
    No retries, no caching, httpx default timeout.
    """

    def __init__(self, url: str = ADVICE_API_URL,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url
        self.transport = transport

    async def get_advice(self, text: str) -> Dict[str, Any]:
        async with httpx.AsyncClient(transport=self.transport) as client:
            resp = await client.post(
                self.url,
                json={"text": text},
                headers={"Content-Type": "application/json"},
            )
            resp.raise_for_status()
            return resp.json()


# =============================================================================
# public service API (imported by routers)
# =============================================================================
async def analyze_diary(text: str, client: AdviceClient) -> Dict[str, Any]:
    """
    Forward the diary text and return the upstream JSON body unchanged:
    {
      "emotion": str,
      "advice": str,
      ...
    }
    The body must match AnalysisResult. Any failure (transport, status,
    decoding, shape) becomes UpstreamError and the detail only goes to the log.
    """
    try:
        data = await client.get_advice(text)
        AnalysisResult.model_validate(data)
        # NaN/Infinity decode fine but cannot be rendered back out
        json.dumps(data, allow_nan=False)
    except httpx.HTTPStatusError as e:
        logger.error("advice API responded with status: %s", e.response.status_code)
        raise UpstreamError() from e
    except httpx.HTTPError as e:
        logger.error("advice API request failed: %r", e)
        raise UpstreamError() from e
    except (ValueError, ValidationError) as e:
        logger.error("advice API returned a malformed body: %s", e)
        raise UpstreamError() from e
    return data
