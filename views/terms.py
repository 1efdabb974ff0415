# views/terms.py
import logging

import streamlit as st

from core.auth import auth_manager
from core.query_cache import query_cache, ALL_USERS_PUBLIC
from core.state_manager import get_app_state
from core.utils import parse_datetime
from services.user_service import UserService

logger = logging.getLogger(__name__)

TERMS_KEY_POINTS = [
    "Each member contributes ₹5,000 per marriage",
    "45-day advance notice required for marriage",
    "Payment due one week before marriage",
    "Fund disbursement on marriage day or day before",
    "One-month grace period for late payments",
    "All transactions must be recorded and verified",
]


def _format_acknowledged_at(value) -> str:
    parsed = parse_datetime(value)
    return parsed.strftime("%B %d, %Y, %I:%M %p") if parsed else ""


def render_terms_dialog(app_state) -> bool:
    """
    Terms of Use gate shown before a member can request funds.

    Returns True once the user has acknowledged the terms.
    """
    if auth_manager.has_acknowledged_terms():
        return True

    with st.container(border=True):
        st.subheader("📜 Terms of Use Required")
        st.markdown(
            "Before you can request funds from the CBMS Marriage Fund, you must read and "
            "acknowledge our Terms of Use. This ensures you understand the rules, "
            "responsibilities, and procedures of the fund."
        )
        st.markdown("**Key Points from Terms of Use:**")
        st.markdown("\n".join(f"- {point}" for point in TERMS_KEY_POINTS))

        col1, col2, _ = st.columns([2, 1, 2])
        with col1:
            if st.button("I Acknowledge & Accept Terms", type="primary", key="accept_terms"):
                auth_manager.acknowledge_terms()
                user_agent = st.context.headers.get("User-Agent", "")
                success, message, _ = UserService.acknowledge_terms(user_agent)
                if success:
                    query_cache.invalidate(ALL_USERS_PUBLIC)
                else:
                    # The local record still unlocks the form
                    logger.warning(message)
                return True
        with col2:
            if st.button("Cancel", key="cancel_terms"):
                app_state.show_terms = False
                st.rerun()

    return False


def _render_signature_list(title, rows):
    st.markdown(f"**{title}**")
    if not rows:
        st.caption("No one yet.")
        return
    for row in rows:
        name_col, status_col = st.columns([3, 1])
        name_col.write(row["name"])
        if row["acknowledged"]:
            status_col.markdown(":green[**APPROVED**]")
        else:
            status_col.markdown(":orange[**PENDING**]")


def _render_acknowledgements():
    st.subheader("✍️ Acknowledgement & Signatures")
    st.caption(
        "Having read and understood this regulation completely, the following members "
        "hereby acknowledge and accept all the terms mentioned herein."
    )
    success, message, users = query_cache.fetch(ALL_USERS_PUBLIC, UserService.get_all_public)
    if not success:
        st.error(message)
        return

    lists = UserService.acknowledgement_lists(users, auth_manager.all_acknowledgements())
    left, right = st.columns(2)
    with left:
        _render_signature_list("🛡️ Responsible Members", lists["responsible"])
    with right:
        _render_signature_list("👥 Members", lists["members"])


def show_terms_page():
    """Terms of Use as a standalone page, reachable from the sidebar."""
    app_state = get_app_state()
    st.header("📜 Terms of Use")

    if auth_manager.has_acknowledged_terms():
        st.success("✅ You have acknowledged the Terms of Use.")
        record = auth_manager.terms_acknowledgement()
        if record and record.get("user_name") and record.get("date"):
            st.caption(f"By {record['user_name']} on {_format_acknowledged_at(record['date'])}")
        st.markdown("**Key Points from Terms of Use:**")
        st.markdown("\n".join(f"- {point}" for point in TERMS_KEY_POINTS))
    elif render_terms_dialog(app_state):
        st.rerun()

    st.divider()
    _render_acknowledgements()
