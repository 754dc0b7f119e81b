from dataclasses import dataclass
from typing import Any, Literal, Mapping, Sequence, Tuple
from .base import Normalizer
from .types import UNKNOWN_DRONE_ID, DjiTelemetry, TelemetryRecord

Scope = Literal["root", "position"]

# Where the nested position object may live, in lookup order
POSITION_KEYS: Tuple[str, ...] = ("position", "pos")


@dataclass(frozen=True)
class FieldRule:
    """
    One output field and the ordered list of input names it can come from.
    The first name holding a non-null value wins; `default` otherwise.
    """
    field: str
    scope: Scope
    names: Tuple[str, ...]
    default: Any = None

    def resolve(self, root: Mapping[str, Any], position: Mapping[str, Any]) -> Any:
        source = position if self.scope == "position" else root
        for name in self.names:
            value = source.get(name)
            if value is not None:
                return value
        return self.default


TELEMETRY_RULES: Tuple[FieldRule, ...] = (
    FieldRule("drone_id", "root", ("drone_sn", "drone_id"), default=UNKNOWN_DRONE_ID),
    FieldRule("lat", "position", ("lat", "latitude")),
    FieldRule("lon", "position", ("lng", "lon", "longitude")),
    FieldRule("alt", "position", ("alt", "altitude")),
)


def extract_position(rec: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the first nested position mapping, or an empty one."""
    for key in POSITION_KEYS:
        candidate = rec.get(key)
        if isinstance(candidate, Mapping):
            return candidate
    return {}


class RuleNormalizer(Normalizer):
    """
    Rule-based normalizer for DJI-style telemetry:
    maps the known field-name variants onto one record shape.
    Values are passed through as-is (no range checks on lat/lon).
    """
    def __init__(self, rules: Sequence[FieldRule] = TELEMETRY_RULES):
        self.rules = tuple(rules)

    def normalize_record(self, rec: DjiTelemetry) -> TelemetryRecord:
        root = rec if isinstance(rec, Mapping) else {}
        position = extract_position(root)
        out = {rule.field: rule.resolve(root, position) for rule in self.rules}
        out["raw"] = rec
        return out  # type: ignore[return-value]
