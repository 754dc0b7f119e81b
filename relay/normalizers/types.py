# relay/normalizers/types.py
from typing import Any, List, Optional, TypedDict, Union

UNKNOWN_DRONE_ID = "unknown-dji"


class DjiPosition(TypedDict, total=False):
    # any of these may be present; the first non-null one per axis wins
    lat: float
    latitude: float
    lng: float
    lon: float
    longitude: float
    alt: float
    altitude: float


class DjiTelemetry(TypedDict, total=False):
    """
    Roughly what a DJI-style telemetry message looks like:
      {
        "drone_sn": "ABCDE12345",
        "timestamp": 1733412345000,
        "position": {"lat": 63.421, "lng": 10.435, "alt": 115},
        "flight_status": "IN_AIR",
        "battery": 86,
        "speed": 12.3
      }
    """
    drone_sn: str
    drone_id: str
    timestamp: int
    position: DjiPosition
    pos: DjiPosition
    flight_status: str
    battery: float
    speed: float


class TelemetryRecord(TypedDict):
    drone_id: str
    lat: Optional[float]
    lon: Optional[float]
    alt: Optional[float]
    raw: Any  # original message, untouched


Payload = Union[DjiTelemetry, List[DjiTelemetry]]
