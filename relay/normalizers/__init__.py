from .pipeline import get_default_normalizer, normalize_batch, is_storable, BatchResult
from .rules import RuleNormalizer, FieldRule, TELEMETRY_RULES
from .types import DjiPosition, DjiTelemetry, Payload, TelemetryRecord, UNKNOWN_DRONE_ID
from .base import Normalizer

__all__ = [
    "get_default_normalizer",
    "normalize_batch",
    "is_storable",
    "BatchResult",
    "RuleNormalizer",
    "FieldRule",
    "TELEMETRY_RULES",
    "DjiTelemetry",
    "Payload",
    "DjiPosition",
    "TelemetryRecord",
    "UNKNOWN_DRONE_ID",
    "Normalizer",
]
