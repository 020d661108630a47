"""Status API routes."""

from __future__ import annotations

from fastapi import APIRouter, Request

from insertive.constants import APP_TITLE, VERSION

router = APIRouter(tags=["status"])


@router.get("/status")
async def get_status(request: Request) -> dict:
    """Get application status and version info."""
    insertive = request.app.state.insertive
    return {
        "version": VERSION,
        "status": "running" if insertive.running else "stopped",
        "app_name": APP_TITLE,
        "snippet_count": len(insertive.repository) if insertive.running else 0,
    }
