import pytest
from delivery.api import ROUTERS, register_error_handlers
from fastapi import FastAPI
from fastapi.testclient import TestClient


@pytest.fixture()
def client():
    app = FastAPI()
    for router in ROUTERS:
        app.include_router(router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def as_user():
    """Request headers that authenticate as ``user``."""

    def _headers(user):
        return {"X-Actor-Id": str(user.id)}

    return _headers
