# =============================================================================
# app/routers/health.py - Probes for Load Balancers and Orchestrators
# =============================================================================
# /api/health reports build info, /api/health/ready pings MongoDB,
# /api/health/live only proves the process answers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app import __version__
from app.dependencies import MongoDep, SettingsDep

router = APIRouter(prefix="/health")


class Probe(BaseModel):
    status: str
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class BuildProbe(Probe):
    environment: str
    version: str


class ReadinessProbe(Probe):
    checks: dict[str, str]


@router.get("", response_model=BuildProbe)
async def health(settings: SettingsDep):
    return BuildProbe(status="healthy", environment=settings.ENVIRONMENT, version=__version__)


@router.get("/ready", response_model=ReadinessProbe)
def ready(mongo: MongoDep):
    """Ping MongoDB; a failed ping degrades the probe instead of failing it."""
    if mongo.ping():
        return ReadinessProbe(status="ready", checks={"database": "healthy"})
    return ReadinessProbe(status="degraded", checks={"database": "unhealthy"})


@router.get("/live", response_model=Probe)
async def live():
    return Probe(status="alive")
