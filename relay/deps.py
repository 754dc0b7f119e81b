from fastapi import Request

from relay.mqtt import BrokerConnection
from relay.repositories import TelemetryStore
from relay.settings import Settings
from relay.vendor import DjiApiClient

# --------------------------------------------------------------------
# Dependencies: resources are built once in the app lifespan and live
# on app.state; routes ask for them through these getters.
# --------------------------------------------------------------------
def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_store(request: Request) -> TelemetryStore:
    return request.app.state.store

def get_dji_client(request: Request) -> DjiApiClient:
    return request.app.state.dji

def get_broker(request: Request) -> BrokerConnection:
    return request.app.state.broker
