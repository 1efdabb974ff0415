# core/state_manager.py
import streamlit as st
from typing import Dict, Any

PAGE_DASHBOARD = "📊 Dashboard"

# Pending edits and confirmations that should not follow the user to another page
TRANSIENT_KEYS = [
    "payment_to_edit",
    "payment_to_delete",
    "payment_form_errors",
    "request_to_approve",
    "request_to_decline",
    "show_create_request",
    "show_wallet_form",
    "show_terms",
    "editing_user_id",
    "show_user_form",
    "user_to_delete",
    "notification_to_delete",
]


class AppState:
    """
    A centralized class to manage the application's UI state.
    The instance __dict__ points at a dict inside st.session_state, so plain
    attribute access persists across reruns.
    """
    def __init__(self):
        if 'app_state_dict' not in st.session_state:
            st.session_state.app_state_dict = self._get_initial_state()

        self.__dict__ = st.session_state.app_state_dict

    def _get_initial_state(self) -> Dict[str, Any]:
        """Defines the initial state of the application."""
        return {
            "page": PAGE_DASHBOARD,
            # Payments
            "payment_to_edit": None,
            "payment_to_delete": None,
            "payment_form_errors": {},
            "payment_form_version": 0,
            # Fund requests
            "fund_request_tab": "all",
            "request_to_approve": None,
            "request_to_decline": None,
            "show_create_request": False,
            "show_wallet_form": False,
            "show_terms": False,
            # Users
            "editing_user_id": None,
            "show_user_form": False,
            "user_to_delete": None,
            # Notifications
            "notification_to_delete": None,
            "announcement_form_version": 0,
            # Profile photo cropping, keyed by form
            "crop_source": {},
            "cropped_photo": {},
            "uploader_version": {},
        }

    def reset_page_state(self, page_keys: list):
        """Resets specific keys in the state, useful when navigating away from a page."""
        initial_state = self._get_initial_state()
        for key in page_keys:
            if key in self.__dict__:
                self.__dict__[key] = initial_state.get(key)

    def reset(self):
        """Resets the entire application state to its initial values."""
        st.session_state.app_state_dict = self._get_initial_state()
        self.__dict__ = st.session_state.app_state_dict


def get_app_state() -> AppState:
    """Bind an AppState to the current session (call from page code, not at import)."""
    return AppState()
