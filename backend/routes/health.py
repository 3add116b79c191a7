"""Health check route."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/healthz")
async def healthz(request: Request) -> dict:
    """Liveness check — never calls the upstream."""
    return {"status": "ok", "service": "apod-gateway", "commit": request.app.state.settings.git_sha}
