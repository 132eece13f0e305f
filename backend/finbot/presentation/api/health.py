"""Health check routes."""

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/")
async def root():
    return {"message": "Finbot server is running."}


@router.get("/health")
async def health(request: Request):
    adapter = getattr(request.app.state, "slack_adapter", None)
    return {
        "status": "healthy",
        "gateway": adapter.state.value if adapter is not None else "absent",
        "inflight_commands": adapter.inflight if adapter is not None else 0,
    }
