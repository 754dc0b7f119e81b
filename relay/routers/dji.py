import logging

from fastapi import APIRouter, Depends, HTTPException

from relay.deps import get_dji_client
from relay.errors import UpstreamError
from relay.vendor import DjiApiClient

log = logging.getLogger(__name__)

router = APIRouter(prefix="/dji", tags=["dji"])


@router.get("/test")
def dji_test(dji: DjiApiClient = Depends(get_dji_client)):
    """Connectivity check against the DJI API with the configured app key."""
    try:
        data = dji.app_version()
    except UpstreamError as e:
        log.error("DJI test failed: %s", e.detail)
        raise HTTPException(500, e.detail)
    return {"ok": True, "data": data}
