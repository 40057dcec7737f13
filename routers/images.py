"""
Image Proxy Router — /api/image-proxy-base64

Fetches a question image server-side and returns it as a base64 data URL so
the browser can embed it in an exported paper without CORS trouble.
"""

import base64
import logging
from typing import AsyncIterator, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query

from config import config

router = APIRouter(prefix="/api", tags=["images"])

log = logging.getLogger(__name__)

DEFAULT_MIME = "image/png"


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=config.IMAGE_PROXY_TIMEOUT, follow_redirects=True) as client:
        yield client


@router.get("/image-proxy-base64")
async def image_proxy_base64(
    url: Optional[str] = Query(None),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    if not url:
        raise HTTPException(status_code=400, detail="URL is required")

    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as e:
        log.error(f"Error fetching image {url}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch image")

    mime = response.headers.get("content-type", "").split(";")[0].strip() or DEFAULT_MIME
    encoded = base64.b64encode(response.content).decode("ascii")
    return {"dataUrl": f"data:{mime};base64,{encoded}"}
