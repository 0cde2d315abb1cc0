"""Tests for the Session Gate over an in-memory store."""

import json

import pytest

from login_app.models.session_state import IS_LOGGED_IN_KEY, USER_KEY
from login_app.models.user import PublicUser
from login_app.session_gate import SessionGate
from login_app.session_store import MemorySessionStore, StorageUnavailableError

ADMIN = PublicUser(username="admin")


class FailingStore(MemorySessionStore):
    """Memory store whose operations can be made to raise."""

    def __init__(self, fail_get=False, fail_set_on=None, fail_remove=False):
        super().__init__()
        self.fail_get = fail_get
        self.fail_set_on = fail_set_on
        self.fail_remove = fail_remove

    def get(self, key):
        if self.fail_get:
            raise StorageUnavailableError("storage disabled")
        return super().get(key)

    def set(self, key, value):
        if key == self.fail_set_on:
            raise StorageUnavailableError("quota exceeded")
        super().set(key, value)

    def remove(self, key):
        if self.fail_remove:
            raise StorageUnavailableError("storage disabled")
        super().remove(key)


class TestRecordLogin:
    def test_writes_both_keys(self, gate, store):
        assert gate.record_login(ADMIN) is True

        assert store.data[IS_LOGGED_IN_KEY] == "true"
        assert json.loads(store.data[USER_KEY]) == {"userName": "admin"}

    def test_round_trip(self, gate):
        gate.record_login(ADMIN)

        state = gate.current_session()
        assert state.is_authenticated
        assert state.user == ADMIN

    @pytest.mark.parametrize("failing_key", [USER_KEY, IS_LOGGED_IN_KEY])
    def test_partial_write_is_rolled_back(self, failing_key):
        store = FailingStore(fail_set_on=failing_key)
        gate = SessionGate(store)

        assert gate.record_login(ADMIN) is False
        assert store.data == {}
        assert not gate.current_session().is_authenticated

    def test_rollback_failure_is_absorbed(self):
        store = FailingStore(fail_set_on=IS_LOGGED_IN_KEY, fail_remove=True)
        gate = SessionGate(store)

        assert gate.record_login(ADMIN) is False
        # Flag was never written, so the leftover payload is inert
        assert not gate.current_session().is_authenticated


class TestRecordLogout:
    def test_clears_session(self, gate, store):
        gate.record_login(ADMIN)
        gate.record_logout()

        assert store.data == {}
        assert not gate.current_session().is_authenticated

    def test_idempotent(self, gate):
        gate.record_login(ADMIN)
        gate.record_logout()
        gate.record_logout()

        assert not gate.current_session().is_authenticated

    def test_on_empty_store(self, gate, store):
        gate.record_logout()
        assert store.data == {}

    def test_storage_failure_absorbed(self):
        gate = SessionGate(FailingStore(fail_remove=True))
        gate.record_logout()


class TestCurrentSession:
    def test_cold_start_is_unauthenticated(self, gate):
        state = gate.current_session()
        assert not state.is_authenticated
        assert state.username == ""

    @pytest.mark.parametrize(
        "data",
        [
            {IS_LOGGED_IN_KEY: "true"},
            {IS_LOGGED_IN_KEY: "true", USER_KEY: "{not json"},
            {IS_LOGGED_IN_KEY: "true", USER_KEY: "null"},
            {IS_LOGGED_IN_KEY: "true", USER_KEY: "[]"},
            {IS_LOGGED_IN_KEY: "true", USER_KEY: '{"name": "admin"}'},
            {IS_LOGGED_IN_KEY: "true", USER_KEY: '{"userName": 7}'},
            {IS_LOGGED_IN_KEY: "false", USER_KEY: '{"userName": "admin"}'},
            {IS_LOGGED_IN_KEY: "True", USER_KEY: '{"userName": "admin"}'},
            {USER_KEY: '{"userName": "admin"}'},
        ],
    )
    def test_partial_or_corrupt_state_is_unauthenticated(self, data):
        gate = SessionGate(MemorySessionStore(data))
        assert not gate.current_session().is_authenticated

    def test_manually_written_state_is_honoured(self):
        store = MemorySessionStore(
            {IS_LOGGED_IN_KEY: "true", USER_KEY: '{"userName": "guest"}'}
        )
        assert SessionGate(store).current_session().username == "guest"

    def test_storage_failure_degrades(self):
        gate = SessionGate(FailingStore(fail_get=True))
        assert not gate.current_session().is_authenticated


class TestSharedStore:
    def test_logout_in_one_tab_seen_on_next_read_in_other(self, store):
        first_tab = SessionGate(store)
        second_tab = SessionGate(store)

        first_tab.record_login(ADMIN)
        assert second_tab.current_session().is_authenticated

        first_tab.record_logout()
        assert not second_tab.current_session().is_authenticated
