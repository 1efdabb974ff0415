# views/login.py
import streamlit as st

from core.auth import auth_manager
from core.config import APP_TITLE, APP_ICON
from core.query_cache import query_cache


def show_login_page():
    """Sign-in form shown until a session exists."""
    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.title(f"{APP_ICON} {APP_TITLE}")
        st.markdown("Sign in to manage contributions, requests and your team.")

        with st.form("login_form"):
            username = st.text_input("Username")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("🔐 Sign In", type="primary", use_container_width=True)

        if submitted:
            if not username or not password:
                st.error("Please enter your username and password.")
                return

            with st.spinner("Signing in..."):
                signed_in = auth_manager.login(username.strip(), password)

            if signed_in:
                # Never show data cached for a previous account
                query_cache.clear()
                st.rerun()
            else:
                st.error("Invalid username or password.")
