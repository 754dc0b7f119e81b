# relay/settings.py
import os
from typing import Literal, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel

StoreBackend = Literal["supabase", "sql"]

DEFAULT_DJI_API_URL = "https://openapi.dji.com"
DEFAULT_TABLE = "drone_telemetry"
DEFAULT_LOCAL_DB_URL = "sqlite:///./telemetry.sqlite3"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


class Settings(BaseModel):
    """
    Process-lifetime configuration, read once at startup.
    Handed to the app factory instead of living in module globals.
    """
    # Store (Supabase REST, or a local SQLAlchemy database)
    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[str] = None
    supabase_table: str = DEFAULT_TABLE
    store_backend: StoreBackend = "supabase"
    local_db_url: str = DEFAULT_LOCAL_DB_URL

    # DJI cloud API
    dji_app_key: Optional[str] = None
    dji_license_key: Optional[str] = None
    dji_api_url: str = DEFAULT_DJI_API_URL

    # DJI message broker
    dji_mqtt_host: Optional[str] = None
    dji_mqtt_port: int = 8883
    dji_mqtt_username: Optional[str] = None
    dji_mqtt_password: Optional[str] = None
    dji_mqtt_client_id: str = "dji-telemetry-relay"
    dji_mqtt_tls: bool = True

    # None -> outbound calls wait indefinitely
    http_timeout_seconds: Optional[float] = None
    log_level: str = "INFO"
    port: int = 3000

    @property
    def store_configured(self) -> bool:
        if self.store_backend == "sql":
            return bool(self.local_db_url)
        return bool(self.supabase_url and self.supabase_service_role_key)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load `.env` from the working directory (if any) and build settings from the environment."""
        load_dotenv(find_dotenv(usecwd=True))
        return cls(
            supabase_url=os.getenv("SUPABASE_URL") or None,
            supabase_service_role_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY") or None,
            supabase_table=os.getenv("SUPABASE_TABLE", DEFAULT_TABLE),
            store_backend=os.getenv("STORE_BACKEND", "supabase").strip().lower(),
            local_db_url=os.getenv("LOCAL_DB_URL", DEFAULT_LOCAL_DB_URL),
            dji_app_key=os.getenv("DJI_APP_KEY") or None,
            dji_license_key=os.getenv("DJI_LICENSE_KEY") or None,
            dji_api_url=os.getenv("DJI_API_URL") or DEFAULT_DJI_API_URL,
            dji_mqtt_host=os.getenv("DJI_MQTT_HOST") or None,
            dji_mqtt_port=int(os.getenv("DJI_MQTT_PORT") or 8883),
            dji_mqtt_username=os.getenv("DJI_MQTT_USERNAME") or None,
            dji_mqtt_password=os.getenv("DJI_MQTT_PASSWORD") or None,
            dji_mqtt_client_id=os.getenv("DJI_MQTT_CLIENT_ID", "dji-telemetry-relay"),
            dji_mqtt_tls=_env_bool("DJI_MQTT_TLS", True),
            http_timeout_seconds=_env_float("HTTP_TIMEOUT_SECONDS"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            port=int(os.getenv("PORT") or 3000),
        )
