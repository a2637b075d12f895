"""Liveness endpoint for the notification listener."""

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request) -> dict:
    return {"status": "healthy", **request.app.state.service_info}
