import logging
from collections.abc import MutableMapping
from typing import Any

import streamlit as st

from env_settings import ENV_SETTINGS
from login_app.models.session_state import SessionState
from login_app.routing import Route, guard
from login_app.session_gate import SessionGate
from login_app.session_store import CookieSessionStore
from login_app.structured_logging import init_logging

logger = logging.getLogger(__name__)

COOKIES_RERUN_KEY = "cookies_rerun"

# Scripts are relative to the main script, as st.switch_page expects
PAGE_SCRIPTS = {
    Route.LOGIN: "__🔐_Login.py",
    Route.PROTECTED: "pages/1_🎉_welcome.py",
}


def should_wait_for_cookies(store: CookieSessionStore, flags: MutableMapping[str, Any]) -> bool:
    """
    True at most once per browser session, while the cookie component loads.

    On first render after refresh the JS component hasn't reported yet, so
    cookies read as missing. One rerun gives it time; if it still hasn't
    loaded, reads raise and the gate treats the session as logged out.
    """
    if store.is_ready():
        return False
    if flags.get(COOKIES_RERUN_KEY):
        logger.warning("Cookie component did not load; continuing as logged out")
        return False
    flags[COOKIES_RERUN_KEY] = True
    return True


def get_session_gate() -> SessionGate:
    """Build the cookie-backed gate. Call once per script run."""
    init_logging(ENV_SETTINGS.log_level, ENV_SETTINGS.log_json)

    if "pending_cookies" not in st.session_state:
        st.session_state["pending_cookies"] = {}

    store = CookieSessionStore.for_browser(
        ENV_SETTINGS.cookie_max_age_seconds, st.session_state["pending_cookies"]
    )

    if should_wait_for_cookies(store, st.session_state):
        st.rerun()

    return SessionGate(store)


def switch_to(route: Route):
    st.switch_page(PAGE_SCRIPTS[route])


def get_session_state(route: Route, gate: SessionGate) -> SessionState:
    """Run the route guard for the page being rendered and redirect if needed."""
    target, state = guard(route, gate)
    if target is not route:
        switch_to(target)
    return state
