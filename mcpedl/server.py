"""
Thin FastAPI REST layer wrapping the MCPEDL client and parsers.

Run with::

    uvicorn mcpedl.server:app --reload --port 8100
"""

from __future__ import annotations

from typing import Optional

import logging

from fastapi import Depends, FastAPI, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from mcpedl.client import McpedlClient, create_client_from_config
from mcpedl.errors import (
    ExtractionError,
    McpedlError,
    NotFoundError,
    RateLimitError,
    RequestFailedError,
    RequestTimeoutError,
    ServerError,
    ValidationError,
)
from mcpedl.parsers import (
    parse_detail_page,
    parse_download_page,
    parse_latest_page,
    parse_search_page,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title='MCPEDL Client API',
    version='2.0.0',
    description='Unofficial structured API for mcpedl.org pages.',
)

# Most specific classes first; MissingFieldError is an ExtractionError
_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (RateLimitError, 429),
    (ExtractionError, 422),
    (RequestTimeoutError, 504),
    (ServerError, 502),
    (RequestFailedError, 502),
)

_client: Optional[McpedlClient] = None


def get_client() -> McpedlClient:
    """Shared client, built from ``config.py`` on first use."""
    global _client
    if _client is None:
        _client = create_client_from_config()
    return _client


def status_for_error(exc: McpedlError) -> int:
    for error_cls, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return status
    return 500


@app.exception_handler(McpedlError)
async def mcpedl_error_handler(request, exc: McpedlError):
    status = status_for_error(exc)
    if status >= 500:
        logger.error(f"{request.url.path} failed: {exc.code} {exc}")
    return JSONResponse(status_code=status, content=exc.to_dict())


# ---------------------------------------------------------------------------
# Request / response schemas (Pydantic models for FastAPI validation)
# ---------------------------------------------------------------------------

class HtmlPayload(BaseModel):
    """POST body for all parse endpoints."""
    html: str


class HealthResponse(BaseModel):
    status: str = 'ok'
    base_url: str = ''


# ---------------------------------------------------------------------------
# Live endpoints
# ---------------------------------------------------------------------------

@app.get('/api/health', response_model=HealthResponse)
async def health_check(client: McpedlClient = Depends(get_client)):
    """Simple liveness probe."""
    return HealthResponse(base_url=client.config.base_url)


@app.get('/api/search')
def api_search(q: str = Query(..., description='Search text'), page: int = 1,
               client: McpedlClient = Depends(get_client)):
    """Search posts on mcpedl.org."""
    return client.search(q, page).to_dict()


@app.get('/api/detail/{post_id}')
def api_detail(post_id: str, client: McpedlClient = Depends(get_client)):
    """Full detail of a single post."""
    return client.detail(post_id).to_dict()


@app.get('/api/download/{file_id}')
def api_download(file_id: int, client: McpedlClient = Depends(get_client)):
    """Resolve a file id to its download URL."""
    return client.download(file_id).to_dict()


@app.get('/api/latest')
def api_latest(page: int = 1, client: McpedlClient = Depends(get_client)):
    """Latest uploads plus quick-download shortcuts."""
    return client.latest(page).to_dict()


# ---------------------------------------------------------------------------
# Offline parse endpoints (HTML supplied by the caller)
# ---------------------------------------------------------------------------

@app.post('/api/parse/search')
async def api_parse_search(payload: HtmlPayload):
    """Parse a search / listing page."""
    return parse_search_page(payload.html).to_dict()


@app.post('/api/parse/detail')
async def api_parse_detail(payload: HtmlPayload):
    """Parse a post detail page."""
    return parse_detail_page(payload.html).to_dict()


@app.post('/api/parse/latest')
async def api_parse_latest(payload: HtmlPayload):
    """Parse a "latest downloads" page."""
    return parse_latest_page(payload.html).to_dict()


@app.post('/api/parse/download')
async def api_parse_download(payload: HtmlPayload):
    """Parse a ``dw_file.php`` redirect page."""
    return parse_download_page(payload.html).to_dict()
