# app.py
import logging
import os
import sys

import streamlit as st

# Add the project root to Python path
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

from core.app_logger import setup_logging
from core.auth import auth_manager
from core.config import APP_TITLE, APP_ICON, LAYOUT
from core.query_cache import query_cache
from core.state_manager import get_app_state, PAGE_DASHBOARD, TRANSIENT_KEYS
from views import (
    show_login_page,
    show_dashboard_page,
    show_payments_page,
    show_wallet_approvals_page,
    show_team_page,
    show_fund_requests_page,
    show_manage_users_page,
    show_notifications_page,
    show_profile_page,
    show_diagnostics_page,
    show_terms_page
)

# Configure Streamlit page
st.set_page_config(
    page_title=APP_TITLE,
    page_icon=APP_ICON,
    layout=LAYOUT,
    initial_sidebar_state="expanded"
)

setup_logging()
logger = logging.getLogger(__name__)

PAGE_PAYMENTS = ("💳 Payments", show_payments_page)
PAGE_VERIFY_DEPOSITS = ("✅ Verify Deposits", show_wallet_approvals_page)
PAGE_TEAM = ("👥 Team", show_team_page)
PAGE_FUND_REQUESTS = ("💍 Fund Requests", show_fund_requests_page)
PAGE_MANAGE_USERS = ("🛠️ Manage Users", show_manage_users_page)
PAGE_NOTIFICATIONS = ("🔔 Notifications", show_notifications_page)
PAGE_PROFILE = ("👤 Profile", show_profile_page)
PAGE_TERMS = ("📜 Terms of Use", show_terms_page)
PAGE_DIAGNOSTICS = ("🩺 Diagnostics", show_diagnostics_page)


def get_pages(user):
    """Navigation entries for the signed-in user's role."""
    home = (PAGE_DASHBOARD, show_dashboard_page)
    if user is not None and user.is_admin:
        return [
            home, PAGE_PAYMENTS, PAGE_VERIFY_DEPOSITS, PAGE_TEAM, PAGE_FUND_REQUESTS,
            PAGE_MANAGE_USERS, PAGE_NOTIFICATIONS, PAGE_PROFILE, PAGE_TERMS, PAGE_DIAGNOSTICS,
        ]
    return [home, PAGE_PAYMENTS, PAGE_TEAM, PAGE_FUND_REQUESTS, PAGE_NOTIFICATIONS, PAGE_PROFILE, PAGE_TERMS]


def logout(app_state):
    user = auth_manager.current_user
    auth_manager.logout()
    query_cache.clear()
    app_state.reset()
    logger.info(f"User '{user.username if user else ''}' signed out")


def main():
    """Main application entry point"""
    auth_manager.restore_session()
    if not auth_manager.is_authenticated:
        show_login_page()
        st.stop()

    app_state = get_app_state()
    user = auth_manager.current_user

    PAGES = get_pages(user)
    page_names = [name for name, _ in PAGES]
    page_functions = {name: func for name, func in PAGES}

    # Navigation sidebar
    with st.sidebar:
        st.header(f"{APP_ICON} {APP_TITLE}")
        st.caption(f"Signed in as **{user.name}** ({user.role_label})")

        current_index = page_names.index(app_state.page) if app_state.page in page_names else 0

        selected_page = st.radio(
            "Navigate:",
            page_names,
            index=current_index
        )

        if selected_page != app_state.page:
            app_state.reset_page_state(TRANSIENT_KEYS)
            app_state.page = selected_page
            st.rerun()

        st.divider()
        if st.button("🚪 Logout", use_container_width=True):
            logout(app_state)
            st.rerun()

    # Route to the selected page based on the state
    page_functions.get(app_state.page, show_dashboard_page)()


if __name__ == "__main__":
    main()
