import logging
from typing import Any, Optional

import requests

from relay.errors import upstream_error
from relay.settings import DEFAULT_DJI_API_URL, Settings

log = logging.getLogger(__name__)


class DjiApiClient:
    """Thin client for the DJI cloud API; only used to check that the keys work."""
    def __init__(
        self,
        app_key: Optional[str],
        base_url: str = DEFAULT_DJI_API_URL,
        license_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.app_key = app_key
        self.license_key = license_key
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "DjiApiClient":
        return cls(
            settings.dji_app_key,
            base_url=settings.dji_api_url,
            license_key=settings.dji_license_key,
            timeout=settings.http_timeout_seconds,
        )

    def app_version(self) -> Any:
        """GET /api/v1/app/version and return the body as-is."""
        url = f"{self.base_url}/api/v1/app/version"
        try:
            r = self.session.get(url, headers={"x-api-key": self.app_key or ""}, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise upstream_error(e) from e
        log.info("DJI API reachable at %s (HTTP %s)", self.base_url, r.status_code)
        try:
            return r.json()
        except ValueError:
            return r.text

    def close(self) -> None:
        self.session.close()
