# views/fund_requests.py
import streamlit as st

from core.auth import auth_manager, can_manage_requests, can_request_funds, can_deposit_wallet
from core.config import DEFAULT_MAX_REQUEST_AMOUNT
from core.models import REQUEST_APPROVED, REQUEST_DECLINED, REQUEST_PENDING
from core.query_cache import query_cache, FUND_REQUESTS, DASHBOARD_STATS, RECENT_REQUESTS, WALLET_TRANSACTIONS
from core.state_manager import get_app_state
from core.utils import format_inr, format_date
from services.dashboard_service import DashboardService
from services.fund_request_service import FundRequestService, TAB_ALL, TAB_MY
from services.wallet_service import WalletService, PAYMENT_METHODS, DEFAULT_PAYMENT_METHOD
from views.terms import render_terms_dialog


def _render_create_form(app_state, max_amount):
    with st.container(border=True):
        st.subheader("💍 New Fund Request")
        st.caption(f"You can request up to {format_inr(max_amount)}.")
        with st.form("create_fund_request_form"):
            amount = st.number_input("Amount (₹)*", min_value=0.0, max_value=float(max_amount), step=1000.0)
            reason = st.text_input("Reason*", placeholder="e.g. Daughter's wedding")
            detailed_reason = st.text_area("Details*", placeholder="Wedding date, venue and anything the reviewers should know")
            col1, col2 = st.columns(2)
            submitted = col1.form_submit_button("📨 Submit Request", type="primary")
            cancelled = col2.form_submit_button("Cancel")

    if cancelled:
        app_state.show_create_request = False
        st.rerun()
    if not submitted:
        return

    errors = FundRequestService.validate_request_form(amount, reason, detailed_reason, max_amount)
    if errors:
        for error in errors.values():
            st.error(error)
        return

    success, message, _ = FundRequestService.create_request(amount, reason.strip(), detailed_reason.strip())
    if success:
        query_cache.invalidate(FUND_REQUESTS, RECENT_REQUESTS, DASHBOARD_STATS)
        app_state.show_create_request = False
        st.toast(message)
        st.rerun()
    else:
        st.error(message)


def _render_wallet_form(app_state):
    with st.container(border=True):
        st.subheader("👛 Deposit to Wallet")
        st.caption("Send money to the fund and submit the transaction details for verification.")
        with st.form("wallet_deposit_form"):
            amount = st.number_input("Amount (₹)*", min_value=0.0, step=500.0)
            methods = list(PAYMENT_METHODS)
            payment_method = st.selectbox(
                "Payment Method",
                methods,
                index=methods.index(DEFAULT_PAYMENT_METHOD),
                format_func=lambda m: PAYMENT_METHODS[m],
            )
            transaction_id = st.text_input("Transaction ID*", placeholder="Bank reference or UPI transaction ID")
            notes = st.text_area("Notes", placeholder="Optional")
            col1, col2 = st.columns(2)
            submitted = col1.form_submit_button("Submit Deposit", type="primary")
            cancelled = col2.form_submit_button("Cancel")

    if cancelled:
        app_state.show_wallet_form = False
        st.rerun()
    if submitted:
        success, message, _ = WalletService.create_deposit(amount, payment_method, transaction_id, notes)
        if success:
            query_cache.invalidate(WALLET_TRANSACTIONS, DASHBOARD_STATS)
            app_state.show_wallet_form = False
            st.toast(message)
            st.rerun()
        else:
            st.error(message)


def _render_review_actions(app_state, request):
    col1, col2 = st.columns(2)
    with col1:
        if st.button("✔️ Approve", type="primary", key=f"approve_{request.id}"):
            app_state.request_to_approve = request.id
            app_state.request_to_decline = None
            st.rerun()
    with col2:
        if st.button("✖️ Decline", key=f"decline_{request.id}"):
            app_state.request_to_decline = request.id
            app_state.request_to_approve = None
            st.rerun()

    if app_state.request_to_approve == request.id:
        with st.form(f"approve_form_{request.id}"):
            payment_date = st.date_input("Scheduled payment date", value=FundRequestService.default_payment_date())
            confirm = st.form_submit_button("Confirm approval", type="primary")
        if confirm:
            success, message, _ = FundRequestService.approve_request(request.id, payment_date)
            if success:
                app_state.request_to_approve = None
                query_cache.invalidate(FUND_REQUESTS, RECENT_REQUESTS, DASHBOARD_STATS)
                st.toast(message)
                st.rerun()
            st.error(message)

    if app_state.request_to_decline == request.id:
        with st.form(f"decline_form_{request.id}"):
            reason = st.text_area("Reason for declining*")
            confirm = st.form_submit_button("Confirm decline")
        if confirm:
            success, message, _ = FundRequestService.decline_request(request.id, reason)
            if success:
                app_state.request_to_decline = None
                query_cache.invalidate(FUND_REQUESTS, RECENT_REQUESTS, DASHBOARD_STATS)
                st.toast(message)
                st.rerun()
            st.error(message)


def _render_request(app_state, user, request):
    with st.container(border=True):
        col1, col2, col3 = st.columns([4, 2, 2])
        with col1:
            st.markdown(f"**{request.reason or 'Fund request'}**")
            st.caption(f"{request.user_name or 'Member'} · Requested {format_date(request.requested_date)}")
        with col2:
            st.markdown(f"**{format_inr(request.amount)}**")
        with col3:
            st.markdown(FundRequestService.status_badge(request))

        with st.expander("Details"):
            st.write(request.detailed_reason or "No details provided.")
            if request.status == REQUEST_APPROVED and request.scheduled_payment_date:
                st.caption(f"Payment scheduled for {format_date(request.scheduled_payment_date)}")
            if request.reviewed_by_name:
                st.caption(f"Reviewed by {request.reviewed_by_name} on {format_date(request.reviewed_at)}")
            if request.status == REQUEST_DECLINED and request.rejection_reason:
                st.warning(f"Declined: {request.rejection_reason}")

        if request.status == REQUEST_PENDING and can_manage_requests(user):
            _render_review_actions(app_state, request)


def show_fund_requests_page():
    app_state = get_app_state()
    user = auth_manager.current_user
    st.header("💍 Fund Requests")

    success, message, requests = query_cache.fetch(FUND_REQUESTS, FundRequestService.get_requests)
    if not success:
        st.error(message)
        return
    _, _, stats = query_cache.fetch(DASHBOARD_STATS, DashboardService.get_stats)
    max_amount = DashboardService.summarize(stats)["system_target"] or DEFAULT_MAX_REQUEST_AMOUNT

    totals = FundRequestService.statistics(requests)
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Requests", totals["total"], help=f"{format_inr(totals['total_amount'])} requested")
    col2.metric("Pending", totals["pending"], help=f"{format_inr(totals['pending_amount'])} pending")
    col3.metric("Approved", totals["approved"], help=f"{format_inr(totals['approved_amount'])} approved")
    col4.metric("Declined", totals["declined"])

    action1, action2, _ = st.columns([1, 1, 3])
    with action1:
        if can_request_funds(user) and st.button("➕ Request Funds", type="primary"):
            if auth_manager.has_acknowledged_terms():
                app_state.show_create_request = True
            else:
                app_state.show_terms = True
            st.rerun()
    with action2:
        if can_deposit_wallet(user) and st.button("👛 Deposit to Wallet"):
            app_state.show_wallet_form = True
            st.rerun()

    if app_state.show_terms:
        if render_terms_dialog(app_state):
            app_state.show_terms = False
            app_state.show_create_request = True
            st.rerun()
    if app_state.show_create_request:
        _render_create_form(app_state, max_amount)
    if app_state.show_wallet_form:
        _render_wallet_form(app_state)

    st.divider()
    tab = st.radio(
        "Show",
        [TAB_ALL, TAB_MY],
        index=0 if app_state.fund_request_tab == TAB_ALL else 1,
        format_func=lambda t: "All Requests" if t == TAB_ALL else "My Requests",
        horizontal=True,
        key="fund_request_tab_selector",
    )
    app_state.fund_request_tab = tab

    visible = FundRequestService.filter_requests(requests, tab, user.id)
    if not visible:
        st.info("No fund requests to show.")
        return
    for request in visible:
        _render_request(app_state, user, request)
