"""Prometheus scrape endpoint: GET /metrics."""

from fastapi import APIRouter, Response

from finbot.observability.metrics import get_metrics_content

router = APIRouter(prefix="/metrics", tags=["observability"])


@router.get("")
async def metrics():
    content, content_type = get_metrics_content()
    return Response(content=content, media_type=content_type)
