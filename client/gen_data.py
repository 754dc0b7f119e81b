# client/gen_data.py
import random
from datetime import datetime, timezone

STATUSES = ["IN_AIR", "IN_AIR", "IN_AIR", "LANDED", "TAKING_OFF", "RETURNING"]
# Rough box around Trondheim
LAT_RANGE = (63.35, 63.48)
LON_RANGE = (10.25, 10.55)

def _sn(): return f"1581F{random.randint(10**6, 10**7 - 1)}"
def _ts(): return int(datetime.now(timezone.utc).timestamp() * 1000)
def _lat(): return round(random.uniform(*LAT_RANGE), 6)
def _lon(): return round(random.uniform(*LON_RANGE), 6)
def _alt(): return round(random.uniform(20, 120), 1)

# Every position shape the relay understands
def _position_short():  return "position", {"lat": _lat(), "lng": _lon(), "alt": _alt()}
def _position_long():   return "position", {"latitude": _lat(), "longitude": _lon(), "altitude": _alt()}
def _pos_mixed():       return "pos", {"lat": _lat(), "lon": _lon(), "altitude": _alt()}
SHAPES = [_position_short, _position_long, _pos_mixed]

def gen_dji_telemetry(drone_sn: str | None = None, shape=None):
    key, position = (shape or random.choice(SHAPES))()
    msg = {
        "drone_sn": drone_sn or _sn(),
        "timestamp": _ts(),
        key: position,
        "flight_status": random.choice(STATUSES),
        "battery": random.randint(15, 100),
        "speed": round(random.uniform(0, 18), 1),
    }
    return msg

def gen_broken_telemetry():
    """A message the relay has to drop: no usable lat/lon."""
    msg = gen_dji_telemetry()
    msg.pop("position", None); msg.pop("pos", None)
    msg["position"] = {"alt": _alt()}
    return msg

def gen_batch(n: int, fleet_size: int = 3, broken_ratio: float = 0.0):
    fleet = [_sn() for _ in range(max(1, fleet_size))]
    out = []
    for _ in range(n):
        if broken_ratio and random.random() < broken_ratio:
            out.append(gen_broken_telemetry())
        else:
            out.append(gen_dji_telemetry(drone_sn=random.choice(fleet)))
    return out
