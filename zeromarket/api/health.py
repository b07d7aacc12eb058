# zeromarket/api/health.py
import time
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..core.config import Settings
from .. import deps

router = APIRouter()
_started = time.time()

class Health(BaseModel):
    status: str
    uptime_s: float
    registry: str

@router.get("", response_model=Health)
def health(settings: Settings = Depends(deps.get_app_settings)):
    return Health(status="ok", uptime_s=time.time() - _started, registry=settings.REGISTRY_ID)
