import logging
from typing import Any, Callable, Optional

import paho.mqtt.client as mqtt

from relay.settings import Settings

log = logging.getLogger(__name__)


class BrokerConnection:
    """
    Owned handle to the DJI message broker.

    connect() opens the connection and starts paho's network loop;
    nothing is subscribed and no messages are handled. Failures are
    logged and leave the handle disconnected, they never stop the app.
    """
    def __init__(
        self,
        host: Optional[str],
        port: int = 8883,
        username: Optional[str] = None,
        password: Optional[str] = None,
        client_id: str = "dji-telemetry-relay",
        tls: bool = True,
        client_factory: Optional[Callable[[], Any]] = None,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.client_id = client_id
        self.tls = tls
        self.client_factory = client_factory
        self.client = None
        self.connected = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "BrokerConnection":
        return cls(
            settings.dji_mqtt_host,
            port=settings.dji_mqtt_port,
            username=settings.dji_mqtt_username,
            password=settings.dji_mqtt_password,
            client_id=settings.dji_mqtt_client_id,
            tls=settings.dji_mqtt_tls,
        )

    def _make_client(self):
        if self.client_factory is not None:
            return self.client_factory()
        return mqtt.Client(mqtt.CallbackAPIVersion.VERSION2, client_id=self.client_id)

    def connect(self) -> None:
        if not self.host:
            log.info("DJI_MQTT_HOST not set, skipping broker connection")
            return
        if self.client is not None:
            return

        client = self._make_client()
        client.on_connect = self._on_connect
        client.on_disconnect = self._on_disconnect
        try:
            if self.username:
                client.username_pw_set(self.username, self.password)
            if self.tls:
                client.tls_set()
            client.connect(self.host, self.port, keepalive=60)
            client.loop_start()
        except (OSError, ValueError) as e:
            log.error("DJI broker connection to %s:%s failed: %s", self.host, self.port, e)
            return
        self.client = client

    def disconnect(self) -> None:
        if self.client is None:
            return
        try:
            self.client.disconnect()
        finally:
            self.client.loop_stop()
            self.client = None
            self.connected = False
        log.info("disconnected from DJI broker %s:%s", self.host, self.port)

    # paho callbacks (VERSION2 signatures)
    def _on_connect(self, client, userdata, flags, reason_code, properties=None):
        if reason_code.is_failure:
            self.connected = False
            log.error("DJI broker refused connection: %s", reason_code)
            return
        self.connected = True
        log.info("connected to DJI broker %s:%s", self.host, self.port)

    def _on_disconnect(self, client, userdata, flags, reason_code, properties=None):
        self.connected = False
        if reason_code.is_failure:
            log.warning("DJI broker connection lost: %s", reason_code)
