"""Liveness and readiness endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request, Response

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request, response: Response) -> dict[str, str]:
    """503 until startup has built the template store, then names its backend."""
    state = request.app.state
    if getattr(state, "template_store", None) is None:
        response.status_code = 503
        return {"status": "starting"}
    return {"status": "ready", "template_backend": state.settings.templates.backend}
