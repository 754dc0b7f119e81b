from copy import deepcopy

from relay.normalizers import (
    FieldRule, RuleNormalizer, UNKNOWN_DRONE_ID, is_storable, normalize_batch,
)


def test_defaults_drone_id_when_missing():
    out = RuleNormalizer().normalize_record({"position": {"lat": 1, "lng": 2}})
    assert out["drone_id"] == UNKNOWN_DRONE_ID
    assert out["lat"] == 1
    assert out["lon"] == 2
    assert out["alt"] is None

def test_long_names_and_raw_kept():
    msg = {"drone_sn": "X1", "position": {"latitude": 10, "longitude": 20, "altitude": 5}}
    out = RuleNormalizer().normalize_record(msg)
    assert out == {"drone_id": "X1", "lat": 10, "lon": 20, "alt": 5, "raw": msg}
    assert out["raw"] is msg

def test_drone_sn_wins_over_drone_id():
    out = RuleNormalizer().normalize_record({"drone_sn": "SN", "drone_id": "ID", "pos": {"lat": 1, "lon": 2}})
    assert out["drone_id"] == "SN"
    out = RuleNormalizer().normalize_record({"drone_sn": None, "drone_id": "ID", "pos": {"lat": 1, "lon": 2}})
    assert out["drone_id"] == "ID"

def test_first_name_wins_per_axis():
    pos = {"lat": 1.5, "latitude": 99, "lng": 2.5, "lon": 98, "longitude": 97, "alt": 3, "altitude": 96}
    out = RuleNormalizer().normalize_record({"position": pos})
    assert (out["lat"], out["lon"], out["alt"]) == (1.5, 2.5, 3)

def test_null_falls_through_but_zero_is_kept():
    out = RuleNormalizer().normalize_record({"position": {"lat": None, "latitude": 0, "lng": 0.0, "alt": 0}})
    assert out["lat"] == 0
    assert out["lon"] == 0.0
    assert out["alt"] == 0
    assert is_storable(out)

def test_pos_used_when_position_missing_or_null():
    out = RuleNormalizer().normalize_record({"position": None, "pos": {"lat": 4, "lon": 5}})
    assert (out["lat"], out["lon"]) == (4, 5)

def test_non_mapping_position_is_ignored():
    out = RuleNormalizer().normalize_record({"position": "63.4,10.4"})
    assert out["lat"] is None and out["lon"] is None

def test_top_level_coordinates_are_not_read():
    out = RuleNormalizer().normalize_record({"lat": 1, "lon": 2})
    assert not is_storable(out)

def test_input_is_not_mutated():
    msg = {"drone_id": "d", "position": {"lat": 1, "lng": 2}, "battery": 80}
    before = deepcopy(msg)
    RuleNormalizer().normalize_record(msg)
    assert msg == before

def test_custom_rules():
    rules = [FieldRule("drone_id", "root", ("serial",), default="none"),
             FieldRule("lat", "position", ("y",)),
             FieldRule("lon", "position", ("x",))]
    out = RuleNormalizer(rules).normalize_record({"serial": "S", "position": {"x": 1, "y": 2}})
    assert out == {"drone_id": "S", "lat": 2, "lon": 1, "raw": {"serial": "S", "position": {"x": 1, "y": 2}}}


def test_batch_accepts_single_object():
    res = normalize_batch({"position": {"lat": 1, "lng": 2}})
    assert res.received == 1
    assert len(res.valid) == 1

def test_batch_drops_records_missing_a_coordinate():
    payload = [
        {"drone_sn": "a", "position": {"lat": 1, "lng": 2}},
        {"drone_sn": "b", "position": {"lat": 1}},          # no lon
        {"drone_sn": "c", "position": {"lng": 2}},          # no lat
        {"drone_sn": "d"},                                  # no position
        {"drone_sn": "e", "pos": {"latitude": 3, "longitude": 4}},
    ]
    res = normalize_batch(payload)
    assert res.received == 5
    assert res.dropped == 3
    assert [r["drone_id"] for r in res.valid] == ["a", "e"]

def test_batch_empty_list():
    res = normalize_batch([])
    assert res.received == 0
    assert res.valid == []
