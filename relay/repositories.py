import logging
from typing import Any, List, Optional, Protocol, Union

import requests
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from relay.db import Base, make_engine, make_session_factory
from relay.errors import UpstreamError, upstream_error
from relay.models import DroneTelemetry
from relay.normalizers import TelemetryRecord
from relay.settings import DEFAULT_TABLE, Settings

log = logging.getLogger(__name__)

Records = Union[TelemetryRecord, List[TelemetryRecord]]


class TelemetryStore(Protocol):
    def insert(self, records: Records) -> Any:
        """Store one record or a list of records in a single call; return the stored rows."""
        ...

    def close(self) -> None:
        ...


class RestTelemetryStore:
    """
    Writes telemetry to Supabase through its PostgREST endpoint.
    One POST per call: no chunking, no retry.
    """
    def __init__(
        self,
        base_url: Optional[str],
        service_key: Optional[str],
        table: str = DEFAULT_TABLE,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or "").rstrip("/")
        self.service_key = service_key
        self.table = table
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def _headers(self) -> dict:
        return {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",  # echo inserted rows back
        }

    def insert(self, records: Records) -> Any:
        if not self.base_url or not self.service_key:
            raise UpstreamError("Supabase store is not configured (SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY)")

        n = len(records) if isinstance(records, list) else 1
        try:
            r = self.session.post(self.url, json=records, headers=self._headers(), timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise upstream_error(e) from e

        try:
            data = r.json()
        except ValueError:
            # rows were written; the store just did not echo them
            log.warning("store answered HTTP %s without a JSON body", r.status_code)
            data = []

        log.debug("stored %d telemetry record(s) in %s", n, self.table)
        return data

    def close(self) -> None:
        self.session.close()


class SqlTelemetryStore:
    """Same contract as the REST store, against a local SQLAlchemy database."""
    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = make_session_factory(engine)
        Base.metadata.create_all(bind=engine)

    def insert(self, records: Records) -> List[dict]:
        items = records if isinstance(records, list) else [records]
        try:
            with self.SessionLocal() as db, db.begin():
                rows = [
                    DroneTelemetry(
                        drone_id=r.get("drone_id"),
                        lat=r.get("lat"),
                        lon=r.get("lon"),
                        alt=r.get("alt"),
                        raw=r.get("raw"),
                    )
                    for r in items
                ]
                db.add_all(rows)
                db.flush()  # assigns ids and defaults
                out = [row.to_dict() for row in rows]
        except SQLAlchemyError as e:
            log.exception("local telemetry insert failed: %d record(s)", len(items))
            raise UpstreamError(str(e)) from e
        return out

    def close(self) -> None:
        self.engine.dispose()


def build_store(settings: Settings) -> TelemetryStore:
    if settings.store_backend == "sql":
        return SqlTelemetryStore(make_engine(settings.local_db_url))
    return RestTelemetryStore(
        settings.supabase_url,
        settings.supabase_service_role_key,
        table=settings.supabase_table,
        timeout=settings.http_timeout_seconds,
    )
