import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api import ROUTERS, register_error_handlers

ADMIN_SECRET = "integration-admin-secret"


@pytest.fixture(autouse=True)
def _admin_secret(monkeypatch):
    monkeypatch.setenv("ADMIN_SECRET", ADMIN_SECRET)


@pytest.fixture()
def client():
    app = FastAPI()
    for router in ROUTERS:
        app.include_router(router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def admin():
    return {"X-Admin-Secret": ADMIN_SECRET}
