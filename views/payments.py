# views/payments.py
from datetime import date, datetime

import streamlit as st

from core.auth import auth_manager, can_manage_requests
from core.models import TRANSACTION_COLLECT
from core.query_cache import query_cache, PAYMENTS, AVAILABLE_MEMBERS, DASHBOARD_STATS
from core.state_manager import get_app_state
from core.utils import format_inr, format_date, format_time_12h, parse_date, sort_by_date_desc
from services.dashboard_service import DashboardService
from services.payment_service import PaymentService
from components.shared_components import (
    notify_result,
    render_selection_box,
    render_confirmation_dialog,
    render_stat_card,
)


def _save_payment(app_state, user, member, payment_type, amount, payment_date, notes):
    """
    Validate and record the new-payment form.

    The form keeps its input until the payment is saved; only then is
    payment_form_version bumped so the next render starts from a blank form.
    """
    errors = PaymentService.validate_payment_form(
        member.id if member else None, amount, payment_date, payment_type, user.is_member
    )
    app_state.payment_form_errors = errors
    if errors:
        return False, "Please fix the highlighted fields"

    success, message, _ = PaymentService.create_payment({
        "user": member.id if member else user.id,
        "amount": amount,
        "date": payment_date.isoformat(),
        "transaction_type": PaymentService.payment_type_to_transaction(payment_type),
        "notes": notes,
        "time": datetime.now().strftime("%H:%M:%S"),
    })
    if not success:
        return False, message

    query_cache.invalidate(PAYMENTS, DASHBOARD_STATS)
    app_state.payment_form_version += 1
    label = "Collection" if payment_type == "collect" else "Payment"
    return True, f"✅ {label} recorded successfully!"


def _render_record_form(app_state, user, members):
    st.subheader("💳 Record New Payment")
    st.caption("Record a collection from a member" if not user.is_admin
               else "Record a collection from a member or a payout from the fund")

    payment_types = PaymentService.allowed_payment_types(user)
    errors = app_state.payment_form_errors
    version = app_state.payment_form_version

    with st.form(f"record_payment_form_{version}"):
        payment_type = st.radio(
            "Payment Type",
            payment_types,
            format_func=lambda t: "Collect" if t == "collect" else "Pay",
            horizontal=True,
        )
        if errors.get("payment_type"):
            st.error(errors["payment_type"])

        member = render_selection_box(
            label="Member*",
            options=members,
            format_func=lambda m: f"{m.name} (@{m.username})",
            key=f"payment_member_{version}",
        )
        if errors.get("member"):
            st.error(errors["member"])

        col1, col2 = st.columns(2)
        with col1:
            amount = st.number_input("Amount (₹)*", min_value=0.0, step=100.0)
            if errors.get("amount"):
                st.error(errors["amount"])
        with col2:
            payment_date = st.date_input("Payment Date*", value=date.today())
            if errors.get("date"):
                st.error(errors["date"])

        notes = st.text_area("Notes", placeholder="Optional")
        submitted = st.form_submit_button("💾 Record Payment", type="primary")

    if not submitted:
        return

    success, message = _save_payment(app_state, user, member, payment_type, amount, payment_date, notes)
    if success:
        st.toast(message)
        st.rerun()
    elif app_state.payment_form_errors:
        # Field errors render inside the form on the next run
        st.rerun()
    else:
        st.error(f"❌ {message}")


def _render_edit_form(app_state, payment):
    with st.container(border=True):
        st.markdown(f"**✏️ Edit payment for {payment.user_name or 'member'}**")
        with st.form(f"edit_payment_{payment.id}"):
            amount = st.number_input("Amount (₹)", min_value=0.0, step=100.0, value=payment.amount)
            payment_date = st.date_input("Date", value=parse_date(payment.date) or date.today())
            notes = st.text_area("Notes", value=payment.notes)
            col1, col2 = st.columns(2)
            save = col1.form_submit_button("💾 Save", type="primary")
            cancel = col2.form_submit_button("Cancel")

    if cancel:
        app_state.payment_to_edit = None
        st.rerun()
    if save:
        if amount <= 0:
            st.error("Amount must be greater than 0")
            return
        success, message, _ = PaymentService.update_payment(payment.id, {
            "user": payment.user,
            "amount": amount,
            "date": payment_date.isoformat(),
            "transaction_type": payment.transaction_type,
            "notes": notes,
            "time": payment.time,
        })
        if success:
            query_cache.invalidate(PAYMENTS)
            app_state.payment_to_edit = None
            st.toast(message)
            st.rerun()
        else:
            st.error(message)


def _render_history(app_state, user, payments):
    st.subheader("📜 Payment History")
    if not payments:
        st.info("No payments recorded yet.")
        return

    for payment in sort_by_date_desc(payments, "date"):
        col1, col2, col3, col4 = st.columns([3, 2, 2, 1])
        with col1:
            st.markdown(f"**{payment.user_name or 'Member'}**")
            st.caption(f"Recorded by {payment.recorded_by_name or 'Unknown'}")
        with col2:
            sign = "+" if payment.transaction_type == TRANSACTION_COLLECT else "-"
            st.write(f"{sign}{format_inr(payment.amount)}")
            st.caption("Collect" if payment.is_collection else "Pay")
        with col3:
            st.write(format_date(payment.date))
            st.caption(format_time_12h(payment.time))
        with col4:
            if user.is_admin:
                if st.button("✏️", key=f"edit_payment_{payment.id}", help="Edit"):
                    app_state.payment_to_edit = payment.id
                    st.rerun()
                if st.button("🗑️", key=f"delete_payment_{payment.id}", help="Delete"):
                    app_state.payment_to_delete = payment.id
                    st.rerun()

        if app_state.payment_to_edit == payment.id:
            _render_edit_form(app_state, payment)

        if app_state.payment_to_delete == payment.id:
            def confirm_delete(payment_id=payment.id):
                success, message, _ = PaymentService.delete_payment(payment_id)
                app_state.payment_to_delete = None
                if success:
                    query_cache.invalidate(PAYMENTS)
                notify_result(success, message)
                st.rerun()

            def cancel_delete():
                app_state.payment_to_delete = None

            render_confirmation_dialog(
                item_name=f"the payment of {format_inr(payment.amount)} for {payment.user_name or 'this member'}",
                on_confirm=confirm_delete,
                on_cancel=cancel_delete,
                dialog_key=f"delete_payment_{payment.id}",
            )


def _render_member_targets(members, payments, system_target):
    st.subheader("🎯 Member Targets")
    rows = []
    for member in members:
        target = PaymentService.member_target(member, system_target)
        rows.append({
            "Member": member.name,
            "Target": format_inr(target),
            "Collected": format_inr(PaymentService.member_total_collected(payments, member.id)),
            "Remaining": format_inr(PaymentService.member_remaining(member, payments, system_target)),
        })
    if rows:
        st.dataframe(rows, use_container_width=True, hide_index=True)
    else:
        st.info("No members to show.")


def show_payments_page():
    app_state = get_app_state()
    user = auth_manager.current_user
    st.header("💳 Payments")

    success, message, payments = query_cache.fetch(PAYMENTS, PaymentService.get_payments)
    if not success:
        st.error(message)
        return

    members = []
    if not user.is_member:
        _, _, members = query_cache.fetch(AVAILABLE_MEMBERS, PaymentService.get_available_members)
    _, _, stats = query_cache.fetch(DASHBOARD_STATS, DashboardService.get_stats)
    system_target = DashboardService.summarize(stats)["system_target"]

    summary = PaymentService.summarize(payments)
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        render_stat_card("Total Collected", format_inr(summary["collected"]), f"{summary['count']} transactions", "📥")
    with col2:
        render_stat_card("Total Paid Out", format_inr(summary["disbursed"]), icon="📤")
    with col3:
        render_stat_card("This Month", format_inr(summary["this_month_total"]),
                         f"{summary['this_month_count']} payments", "📅")
    with col4:
        render_stat_card("Average", format_inr(summary["average"]), icon="📈")

    if can_manage_requests(user):
        st.divider()
        _render_record_form(app_state, user, members)

    st.divider()
    _render_history(app_state, user, payments)

    if members:
        st.divider()
        _render_member_targets(members, payments, system_target)
