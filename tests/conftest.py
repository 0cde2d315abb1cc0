"""Pytest configuration: API TestClient, in-memory session store and gate."""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from login_app.api import create_app
from login_app.session_gate import SessionGate
from login_app.session_store import MemorySessionStore


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    with TestClient(create_app()) as tc:
        yield tc


@pytest.fixture()
def store() -> MemorySessionStore:
    return MemorySessionStore()


@pytest.fixture()
def gate(store: MemorySessionStore) -> SessionGate:
    return SessionGate(store)
