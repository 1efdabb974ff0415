# views/profile.py
import streamlit as st

from core.auth import auth_manager
from core.models import MARITAL_STATUSES
from core.query_cache import query_cache, PAYMENTS, DASHBOARD_STATS, USERS, ALL_USERS_PUBLIC
from core.state_manager import get_app_state
from core.utils import format_inr, format_date
from services.dashboard_service import DashboardService
from services.payment_service import PaymentService
from services.user_service import UserService
from components.image_cropper import ImageCropperComponent
from components.shared_components import render_stat_card, render_progress

PROFILE_PHOTO_KEY = "profile"


def _render_edit_form(app_state, user):
    with st.container(border=True):
        st.subheader("✏️ Edit Profile")
        photo = ImageCropperComponent.render_photo_field(app_state, PROFILE_PHOTO_KEY, user.profile_photo)

        with st.form("profile_form"):
            name = st.text_input("Full Name", value=user.name)
            username = st.text_input("Username", value=user.username)
            email = st.text_input("Email", value=user.email or "")
            phone = st.text_input("Phone", value=user.phone or "")
            marital_status = st.selectbox(
                "Marital Status",
                MARITAL_STATUSES,
                index=MARITAL_STATUSES.index(user.marital_status) if user.marital_status in MARITAL_STATUSES else 1,
            )
            col1, col2 = st.columns(2)
            submitted = col1.form_submit_button("💾 Save Changes", type="primary")
            cancelled = col2.form_submit_button("Cancel")

    if cancelled:
        app_state.editing_user_id = None
        app_state.cropped_photo.pop(PROFILE_PHOTO_KEY, None)
        st.rerun()
    if submitted:
        success, message, _ = UserService.update_profile(user, {
            "name": name,
            "username": username.strip(),
            "email": email.strip(),
            "phone": phone.strip(),
            "marital_status": marital_status,
        }, photo)
        if success:
            auth_manager.refresh_current_user()
            query_cache.invalidate(USERS, ALL_USERS_PUBLIC)
            app_state.editing_user_id = None
            app_state.cropped_photo.pop(PROFILE_PHOTO_KEY, None)
            st.toast(message)
            st.rerun()
        else:
            st.error(message)


def show_profile_page():
    app_state = get_app_state()
    user = auth_manager.current_user
    st.header("👤 My Profile")

    photo_col, info_col = st.columns([1, 4])
    with photo_col:
        if user.profile_photo:
            st.image(user.profile_photo, width=120)
        else:
            st.markdown(f"# {user.initial}")
    with info_col:
        st.markdown(f"### {user.name}")
        st.caption(f"@{user.username} · {user.role_label.title()}")
        st.write(f"📧 {user.email or 'Not set'}")
        st.write(f"📱 {user.phone or 'Not set'}")
        st.write(f"💍 {user.marital_status}")
        if user.date_joined:
            st.caption(f"Member since {format_date(user.date_joined)}")
        if app_state.editing_user_id != user.id and st.button("✏️ Edit Profile"):
            app_state.editing_user_id = user.id
            st.rerun()

    if app_state.editing_user_id == user.id:
        _render_edit_form(app_state, user)

    st.divider()
    _, _, payments = query_cache.fetch(PAYMENTS, PaymentService.get_payments)
    _, _, stats = query_cache.fetch(DASHBOARD_STATS, DashboardService.get_stats)
    summary = UserService.profile_statistics(user, payments, DashboardService.summarize(stats)["system_target"])

    st.subheader("📈 My Contributions")
    col1, col2, col3 = st.columns(3)
    with col1:
        render_stat_card("Total Paid", format_inr(summary["total_paid"]), f"{summary['payment_count']} payments", "💰")
    with col2:
        render_stat_card("Target", format_inr(summary["target"]), icon="🎯")
    with col3:
        render_stat_card("To Collect", format_inr(max(0, summary["to_collect"])), icon="⏳")
    render_progress("Progress", summary["total_paid"], summary["target"], summary["progress"])

    last = summary["last_payment"]
    if last:
        st.caption(f"Last payment: {format_inr(last.amount)} on {format_date(last.date)}")
