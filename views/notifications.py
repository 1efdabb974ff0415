# views/notifications.py
import streamlit as st

from core.auth import auth_manager
from core.query_cache import query_cache, NOTIFICATIONS
from core.state_manager import get_app_state
from core.utils import relative_time
from services.notification_service import NotificationService
from components.shared_components import notify_result, render_confirmation_dialog


def _render_announcement_form(app_state):
    with st.expander("📣 Send Announcement"):
        # Keyed by version so the typed text survives a failed send
        with st.form(f"announcement_form_{app_state.announcement_form_version}"):
            title = st.text_input("Title*")
            message = st.text_area("Message*")
            submitted = st.form_submit_button("Send to all members", type="primary")
        if submitted:
            success, msg, _ = NotificationService.announce(title, message)
            if success:
                query_cache.invalidate(NOTIFICATIONS)
                app_state.announcement_form_version += 1
                st.toast(msg)
                st.rerun()
            else:
                st.error(msg)


def show_notifications_page():
    app_state = get_app_state()
    user = auth_manager.current_user
    st.header("🔔 Notifications")

    success, message, notifications = query_cache.fetch(NOTIFICATIONS, NotificationService.get_notifications)
    if not success:
        st.error(message)
        return

    counts = NotificationService.counts(notifications)
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Unread", counts["unread"])
    col2.metric("Total", counts["total"])
    col3.metric("High Priority", counts["high_priority"])
    col4.metric("This Week", counts["this_week"])

    if user.is_admin:
        _render_announcement_form(app_state)

    if counts["unread"] > 0:
        if st.button("✔️ Mark all as read", key="mark_all_read"):
            ok, msg, _ = NotificationService.mark_all_read()
            if ok:
                query_cache.invalidate(NOTIFICATIONS)
                st.rerun()
            st.error(msg)

    st.divider()
    if not notifications:
        st.info("You're all caught up. No notifications yet.")
        return

    for n in notifications:
        with st.container(border=True):
            icon_col, body_col, action_col = st.columns([1, 8, 2])
            with icon_col:
                st.markdown(f"## {NotificationService.type_icon(n.notification_type)}")
            with body_col:
                unread_marker = "🔵 " if not n.is_read else ""
                st.markdown(f"{unread_marker}**{n.title}**")
                st.write(n.message)
                color = NotificationService.priority_color(n.priority)
                st.caption(f":{color}[{n.priority}] · {relative_time(n.created_at)}")
            with action_col:
                if not n.is_read and st.button("Mark read", key=f"read_{n.id}"):
                    ok, msg, _ = NotificationService.mark_read(n.id)
                    if ok:
                        query_cache.invalidate(NOTIFICATIONS)
                        st.rerun()
                    st.error(msg)
                if st.button("🗑️", key=f"delete_notification_{n.id}", help="Delete"):
                    app_state.notification_to_delete = n.id
                    st.rerun()

            if app_state.notification_to_delete == n.id:
                def confirm_delete(notification_id=n.id):
                    ok, msg, _ = NotificationService.delete(notification_id)
                    app_state.notification_to_delete = None
                    if ok:
                        query_cache.invalidate(NOTIFICATIONS)
                    notify_result(ok, msg)
                    st.rerun()

                def cancel_delete():
                    app_state.notification_to_delete = None

                render_confirmation_dialog(
                    item_name=f"the notification \"{n.title}\"",
                    on_confirm=confirm_delete,
                    on_cancel=cancel_delete,
                    dialog_key=f"delete_notification_{n.id}",
                )
