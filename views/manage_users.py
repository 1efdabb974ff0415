# views/manage_users.py
import streamlit as st

from core.api_client import fix_media_url
from core.auth import auth_manager, can_manage_users
from core.models import USER_ROLES, MARITAL_STATUSES, ROLE_MEMBER
from core.query_cache import query_cache, USERS, ALL_USERS_PUBLIC, AVAILABLE_MEMBERS, DASHBOARD_STATS, TEAM_STRUCTURE
from core.state_manager import get_app_state
from core.utils import format_inr
from services.user_service import UserService
from components.image_cropper import ImageCropperComponent
from components.shared_components import notify_result, render_confirmation_dialog

NEW_USER = "new"
USER_FORM_PHOTO_KEY = "manage_user"


def _close_form(app_state):
    app_state.show_user_form = False
    app_state.editing_user_id = None
    app_state.cropped_photo.pop(USER_FORM_PHOTO_KEY, None)
    app_state.crop_source.pop(USER_FORM_PHOTO_KEY, None)


def _render_user_form(app_state, users, editing):
    title = f"✏️ Edit {editing.name}" if editing else "➕ Create User"
    with st.container(border=True):
        st.subheader(title)

        st.markdown("**Profile Photo**")
        photo = ImageCropperComponent.render_photo_field(
            app_state, USER_FORM_PHOTO_KEY, fix_media_url(editing.profile_photo) if editing else None
        )

        responsible = UserService.responsible_members(users)
        responsible_ids = [""] + [u.id for u in responsible]
        names = {u.id: u.name for u in responsible}

        with st.form("user_form"):
            col1, col2 = st.columns(2)
            with col1:
                name = st.text_input("Full Name*", value=editing.name if editing else "")
                username = st.text_input("Username*", value=editing.username if editing else "")
                email = st.text_input("Email", value=(editing.email or "") if editing else "")
                phone = st.text_input("Phone", value=(editing.phone or "") if editing else "")
            with col2:
                role = st.selectbox(
                    "Role",
                    USER_ROLES,
                    index=USER_ROLES.index(editing.role) if editing and editing.role in USER_ROLES else USER_ROLES.index(ROLE_MEMBER),
                    format_func=lambda r: r.replace("_", " ").title(),
                )
                marital_status = st.selectbox(
                    "Marital Status",
                    MARITAL_STATUSES,
                    index=MARITAL_STATUSES.index(editing.marital_status)
                    if editing and editing.marital_status in MARITAL_STATUSES else 1,
                )
                assigned = st.number_input(
                    "Assigned Amount (₹)",
                    min_value=0.0,
                    step=500.0,
                    value=editing.assigned_monthly_amount if editing else 0.0,
                )
                current_rm = editing.responsible_member_id if editing and editing.responsible_member_id in names else ""
                responsible_member = st.selectbox(
                    "Responsible Member (members only)",
                    responsible_ids,
                    index=responsible_ids.index(current_rm),
                    format_func=lambda i: names.get(i, "None"),
                )
            password = "" if editing else st.text_input("Password*", type="password")

            c1, c2 = st.columns(2)
            submitted = c1.form_submit_button("💾 Save", type="primary")
            cancelled = c2.form_submit_button("Cancel")

    if cancelled:
        _close_form(app_state)
        st.rerun()
    if not submitted:
        return

    if not name.strip() or not username.strip():
        st.error("Name and username are required.")
        return

    form = {
        "name": name,
        "username": username.strip(),
        "email": email.strip(),
        "phone": phone.strip(),
        "role": role,
        "marital_status": marital_status,
        "assigned_monthly_amount": assigned,
        "responsible_member": responsible_member if role == ROLE_MEMBER else "",
        "password": password,
    }
    if editing:
        success, message, _ = UserService.update_user(editing.id, form, photo)
    else:
        success, message, _ = UserService.create_user(form, photo)

    if success:
        query_cache.invalidate(USERS, ALL_USERS_PUBLIC, AVAILABLE_MEMBERS, DASHBOARD_STATS, TEAM_STRUCTURE)
        _close_form(app_state)
        st.toast(message)
        st.rerun()
    else:
        st.error(message)


def show_manage_users_page():
    app_state = get_app_state()
    if not can_manage_users(auth_manager.current_user):
        st.error("Access denied. Admin privileges required.")
        return

    st.header("🛠️ Manage Users")

    success, message, users = query_cache.fetch(USERS, UserService.get_users)
    if not success:
        st.error(message)
        return

    if not app_state.show_user_form:
        if st.button("➕ Add User", type="primary"):
            app_state.show_user_form = True
            app_state.editing_user_id = NEW_USER
            st.rerun()
    else:
        editing = next((u for u in users if u.id == app_state.editing_user_id), None)
        _render_user_form(app_state, users, editing)

    st.divider()
    st.caption(f"{len(users)} users")
    for u in users:
        with st.container(border=True):
            photo_col, info_col, amount_col, action_col = st.columns([1, 4, 2, 2])
            with photo_col:
                if u.profile_photo:
                    st.image(fix_media_url(u.profile_photo), width=48)
                else:
                    st.markdown(f"### {u.initial}")
            with info_col:
                st.markdown(f"**{u.name}** · @{u.username}")
                details = [u.role_label.title(), u.marital_status]
                if u.responsible_member_name:
                    details.append(f"Team: {u.responsible_member_name}")
                st.caption(" · ".join(details))
            with amount_col:
                st.write(format_inr(u.assigned_monthly_amount))
            with action_col:
                if st.button("✏️ Edit", key=f"edit_user_{u.id}"):
                    app_state.cropped_photo.pop(USER_FORM_PHOTO_KEY, None)
                    app_state.show_user_form = True
                    app_state.editing_user_id = u.id
                    st.rerun()
                if u.id != auth_manager.current_user.id and st.button("🗑️ Delete", key=f"delete_user_{u.id}"):
                    app_state.user_to_delete = u.id
                    st.rerun()

            if app_state.user_to_delete == u.id:
                def confirm_delete(user_id=u.id):
                    ok, msg, _ = UserService.delete_user(user_id)
                    app_state.user_to_delete = None
                    if ok:
                        query_cache.invalidate(USERS, ALL_USERS_PUBLIC, AVAILABLE_MEMBERS, DASHBOARD_STATS, TEAM_STRUCTURE)
                    notify_result(ok, msg)
                    st.rerun()

                def cancel_delete():
                    app_state.user_to_delete = None

                render_confirmation_dialog(
                    item_name=u.name,
                    on_confirm=confirm_delete,
                    on_cancel=cancel_delete,
                    dialog_key=f"delete_user_{u.id}",
                    warning_text="The user's payment history and requests may be removed with them.",
                )
