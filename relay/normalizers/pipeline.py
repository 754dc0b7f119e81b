import logging
from dataclasses import dataclass, field
from typing import List, Optional
from .base import Normalizer
from .types import Payload, TelemetryRecord
from .rules import RuleNormalizer

log = logging.getLogger(__name__)


@dataclass
class BatchResult:
    received: int
    valid: List[TelemetryRecord] = field(default_factory=list)

    @property
    def dropped(self) -> int:
        return self.received - len(self.valid)


def is_storable(rec: TelemetryRecord) -> bool:
    """Only records with both coordinates may be stored."""
    return rec["lat"] is not None and rec["lon"] is not None


def get_default_normalizer() -> Normalizer:
    """Factory for the normalizer used by the telemetry routes."""
    return RuleNormalizer()


def normalize_batch(payload: Payload, normalizer: Optional[Normalizer] = None) -> BatchResult:
    """
    Accept one message or a list of messages, normalize each one and
    keep the storable ones (input order preserved).
    """
    normalizer = normalizer or get_default_normalizer()
    items = payload if isinstance(payload, list) else [payload]

    cleaned = [normalizer.normalize_record(item) for item in items]
    result = BatchResult(received=len(items), valid=[c for c in cleaned if is_storable(c)])

    if result.dropped:
        log.info("dropped %d of %d telemetry message(s) without lat/lon",
                 result.dropped, result.received)
    return result
