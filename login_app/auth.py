import streamlit as st

from login_app.api_client import submit_login
from login_app.models.login import LoginSuccess
from login_app.routing import Route
from login_app.session_gate import SessionGate
from login_app.session_state import switch_to

SESSION_NOT_SAVED_MESSAGE = (
    "Your session could not be saved. Please enable cookies and try again."
)


def login(gate: SessionGate, user_name: str, password: str) -> str | None:
    """Submit credentials. Navigates away on success, else returns the error to show."""
    with st.spinner("Logging in..."):
        result = submit_login(user_name, password)

    if not isinstance(result, LoginSuccess):
        return result.message

    if not gate.record_login(result.user):
        return SESSION_NOT_SAVED_MESSAGE

    st.toast(result.message)
    switch_to(Route.PROTECTED)
    return None


def logout(gate: SessionGate):
    gate.record_logout()
    st.toast("Logged out successfully")
    switch_to(Route.LOGIN)
