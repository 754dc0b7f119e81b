from relay.errors import UpstreamError


def test_root_health_text(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert "DJI backend" in r.text

def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    out = r.json()
    assert out["ok"] is True
    assert out["store"] == "sql"
    assert out["broker_connected"] is False


def test_single_message_is_stored(client):
    msg = {"drone_sn": "X1", "position": {"latitude": 10, "longitude": 20, "altitude": 5}, "battery": 86}
    r = client.post("/dji/telemetry", json=msg)
    assert r.status_code == 200, r.text
    out = r.json()
    assert out["ok"] is True
    assert out["received"] == 1
    assert out["stored"] == 1
    row = out["data"][0]
    assert row["drone_id"] == "X1"
    assert (row["lat"], row["lon"], row["alt"]) == (10, 20, 5)
    assert row["raw"] == msg
    assert row["id"] is not None

def test_batch_drops_invalid_and_counts_stored(client):
    payload = [
        {"drone_sn": "A", "position": {"lat": 63.42, "lng": 10.43, "alt": 115}},
        {"drone_sn": "B", "position": {"alt": 50}},
        {"pos": {"lat": 63.40, "lon": 10.40}},
    ]
    r = client.post("/dji/telemetry", json=payload)
    assert r.status_code == 200, r.text
    out = r.json()
    assert out["received"] == 3
    assert out["stored"] == 2
    assert [d["drone_id"] for d in out["data"]] == ["A", "unknown-dji"]

def test_batch_is_one_store_call(client, fake_store):
    payload = [{"drone_id": f"d{i}", "position": {"lat": i, "lng": i}} for i in range(4)]
    r = client.post("/dji/telemetry", json=payload)
    assert r.status_code == 200
    assert len(fake_store.calls) == 1
    assert len(fake_store.calls[0]) == 4
    assert r.json()["stored"] == 4

def test_stored_reflects_store_echo(client, fake_store):
    fake_store.insert = lambda records: fake_store.calls.append(records) or [{"id": 1}]
    payload = [{"position": {"lat": 1, "lng": 2}}, {"position": {"lat": 3, "lng": 4}}]
    out = client.post("/dji/telemetry", json=payload).json()
    assert out["received"] == 2
    assert out["stored"] == 1

def test_all_invalid_is_400_and_store_untouched(client, fake_store):
    r = client.post("/dji/telemetry", json=[{"drone_sn": "A"}, {"position": {"lat": 1}}])
    assert r.status_code == 400
    assert r.json() == {"ok": False, "error": "No valid positions (lat/lon missing)"}
    assert fake_store.calls == []

def test_empty_array_is_400(client, fake_store):
    r = client.post("/dji/telemetry", json=[])
    assert r.status_code == 400
    assert fake_store.calls == []

def test_store_failure_is_500_with_detail(client, fake_store):
    fake_store.error = UpstreamError({"code": "42501", "message": "permission denied"}, status_code=401)
    r = client.post("/dji/telemetry", json={"position": {"lat": 1, "lng": 2}})
    assert r.status_code == 500
    assert r.json() == {"ok": False, "error": {"code": "42501", "message": "permission denied"}}

def test_non_object_body_is_422_envelope(client, fake_store):
    r = client.post("/dji/telemetry", json="hello")
    assert r.status_code == 422
    out = r.json()
    assert out["ok"] is False
    assert out["error"]
    assert fake_store.calls == []


def test_test_insert_defaults(client, fake_store):
    r = client.post("/test-insert")
    assert r.status_code == 200, r.text
    assert fake_store.calls == [{"drone_id": "test-drone", "lat": 63.4, "lon": 10.4, "alt": 100, "raw": None}]
    assert r.json()["ok"] is True

def test_test_insert_with_body(client):
    r = client.post("/test-insert", json={"drone_id": "manual-1", "alt": 42, "raw": {"note": "hi"}})
    assert r.status_code == 200, r.text
    row = r.json()["data"][0]
    assert row["drone_id"] == "manual-1"
    assert (row["lat"], row["lon"], row["alt"]) == (63.4, 10.4, 42)
    assert row["raw"] == {"note": "hi"}

def test_test_insert_failure(client, fake_store):
    fake_store.error = UpstreamError("connection refused")
    r = client.post("/test-insert", json={})
    assert r.status_code == 500
    assert r.json() == {"ok": False, "error": "connection refused"}

def test_unknown_route_uses_envelope(client):
    r = client.get("/nope")
    assert r.status_code == 404
    assert r.json()["ok"] is False

def test_store_success_without_echo_reports_zero_stored(client, app):
    from relay.deps import get_store
    from relay.repositories import RestTelemetryStore
    from fakes import FakeSession, make_response

    store = RestTelemetryStore("https://abc.supabase.co", "k", session=FakeSession(make_response(201, text="")))
    app.dependency_overrides[get_store] = lambda: store
    r = client.post("/dji/telemetry", json=[{"position": {"lat": 1, "lng": 2}}])
    assert r.status_code == 200, r.text
    assert r.json() == {"ok": True, "received": 1, "stored": 0, "data": []}

def test_test_insert_is_typed(client, fake_store):
    r = client.post("/test-insert", json={"drone_id": 123})
    assert r.status_code == 422
    assert r.json()["ok"] is False
    assert fake_store.calls == []
