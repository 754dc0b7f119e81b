# relay/normalizers/base.py
from typing import Protocol
from .types import DjiTelemetry, TelemetryRecord

class Normalizer(Protocol):
    def normalize_record(self, rec: DjiTelemetry) -> TelemetryRecord:
        """Return a NEW normalized record. Do not mutate `rec`."""
        ...
