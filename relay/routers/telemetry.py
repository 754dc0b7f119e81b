import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel

from relay.deps import get_store
from relay.errors import UpstreamError
from relay.normalizers import get_default_normalizer, normalize_batch
from relay.repositories import TelemetryStore

log = logging.getLogger(__name__)

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="", tags=["telemetry"])


# Manual insert body: every field has a default so an empty POST works
class ManualInsertRequest(BaseModel):
    drone_id: Optional[str] = "test-drone"
    lat: Optional[float] = 63.4
    lon: Optional[float] = 10.4
    alt: Optional[float] = 100
    raw: Any = None


@router.post("/test-insert")
def manual_insert(req: Optional[ManualInsertRequest] = None, store: TelemetryStore = Depends(get_store)):
    """
    Write one hand-made position straight to the store.
    Handy from curl/Postman to check the store credentials.

    Returns:
      {"ok": True, "data": <rows echoed by the store>}
    """
    req = req or ManualInsertRequest()
    try:
        data = store.insert(req.model_dump())
    except UpstreamError as e:
        log.error("test-insert failed: %s", e.detail)
        raise HTTPException(500, e.detail)
    return {"ok": True, "data": data}


@router.post("/dji/telemetry")
def dji_telemetry(
    payload: Union[List[Dict[str, Any]], Dict[str, Any]] = Body(...),
    store: TelemetryStore = Depends(get_store),
):
    """
    Ingest DJI-style telemetry: one message or a JSON array of messages.

    Each message is normalized to {drone_id, lat, lon, alt, raw};
    messages without both lat and lon are dropped. The rest go to
    the store in a single insert.

    Returns:
        {
          "ok": True,
          "received": <messages in the request>,
          "stored": <rows echoed back by the store>,
          "data": [ ... stored rows ... ]
        }
    400 if no message has a usable position (nothing is sent to the store).
    """
    batch = normalize_batch(payload, normalizer=get_default_normalizer())
    if not batch.valid:
        raise HTTPException(400, "No valid positions (lat/lon missing)")

    try:
        data = store.insert(batch.valid)
    except UpstreamError as e:
        log.error("storing %d telemetry record(s) failed: %s", len(batch.valid), e.detail)
        raise HTTPException(500, e.detail)

    return {
        "ok": True,
        "received": batch.received,
        "stored": len(data) if isinstance(data, list) else 0,
        "data": data,
    }
