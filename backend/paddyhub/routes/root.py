"""
PaddyHub Backend: Liveness Route
================================

GET / answers with a plain-text banner so a browser or uptime probe can see
the process is up. It does not touch any store; use /health for that.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Health"])

BANNER = "PaddyHub server running (car, qr, stock)"


@router.get("/", response_class=PlainTextResponse, summary="Liveness banner")
async def root() -> str:
    return BANNER
