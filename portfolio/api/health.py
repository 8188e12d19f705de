from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Request, status
from pydantic import BaseModel

from portfolio import __version__
from portfolio.version_info import BuildInfo

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    service: str


class ReadinessResponse(BaseModel):
    ready: bool
    checks: Dict[str, str]


@router.get("/healthz", status_code=status.HTTP_200_OK)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(tz=timezone.utc).isoformat(),
        service="portfolio",
    )


@router.get("/readyz", status_code=status.HTTP_200_OK)
async def readiness_check(request: Request) -> ReadinessResponse:
    index = getattr(request.app.state, "content_index", None)
    checks = {
        "content_index": "ok" if index is not None else "not_loaded",
        "documents": str(len(index)) if index is not None else "0",
    }
    return ReadinessResponse(ready=index is not None, checks=checks)


@router.get("/version")
async def version(request: Request) -> Dict[str, str]:
    build_info: BuildInfo = request.app.state.build_info
    return build_info.as_dict()
