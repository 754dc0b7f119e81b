from datetime import datetime, timezone
from sqlalchemy import JSON, Column, DateTime, Float, Integer, String
from .db import Base

def _utcnow():
    return datetime.now(timezone.utc)

# -----------------------------
# Local mirror of the Supabase `drone_telemetry` table
# -----------------------------
class DroneTelemetry(Base):
    __tablename__ = "drone_telemetry"
    id         = Column(Integer, primary_key=True, autoincrement=True)
    drone_id   = Column(String, index=True, nullable=False)
    lat        = Column(Float)
    lon        = Column(Float)
    alt        = Column(Float)
    raw        = Column(JSON)                                # original message
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "drone_id": self.drone_id,
            "lat": self.lat,
            "lon": self.lon,
            "alt": self.alt,
            "raw": self.raw,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<DroneTelemetry(id={self.id}, drone_id={self.drone_id}, lat={self.lat}, lon={self.lon})>"
