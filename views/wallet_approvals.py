# views/wallet_approvals.py
import streamlit as st

from components.shared_components import notify_result
from core.auth import auth_manager
from core.query_cache import query_cache, WALLET_TRANSACTIONS, PAYMENTS, DASHBOARD_STATS
from core.utils import format_inr, format_date
from services.wallet_service import WalletService


def show_wallet_approvals_page():
    """Admin queue of wallet deposits waiting for verification."""
    if not auth_manager.current_user.is_admin:
        st.error("Only administrators can verify deposits.")
        return

    st.header("✅ Verify Deposits")
    st.markdown("Check each deposit against your bank or UPI statement before approving it.")

    success, message, transactions = query_cache.fetch(WALLET_TRANSACTIONS, WalletService.get_transactions)
    if not success:
        st.error(message)
        return

    pending = WalletService.pending(transactions)
    if not pending:
        st.success("🎉 All caught up! No pending deposits to verify.")
        return

    st.caption(f"{len(pending)} deposit(s) pending")
    for tx in pending:
        with st.container(border=True):
            col1, col2, col3 = st.columns([3, 2, 2])
            with col1:
                st.markdown(f"**{tx.user_name or 'Member'}**")
                st.caption(f"{WalletService.payment_method_label(tx.payment_method)} · Txn ID: `{tx.transaction_id}`")
                if tx.notes:
                    st.caption(f"📝 {tx.notes}")
            with col2:
                st.markdown(f"### {format_inr(tx.amount)}")
                st.caption(format_date(tx.date))
            with col3:
                if st.button("✔️ Approve", type="primary", key=f"approve_tx_{tx.id}"):
                    ok, msg, _ = WalletService.approve(tx.id)
                    if ok:
                        # Approval adds to collections too
                        query_cache.invalidate(WALLET_TRANSACTIONS, PAYMENTS, DASHBOARD_STATS)
                    notify_result(ok, msg)
                    st.rerun()
                if st.button("✖️ Reject", key=f"reject_tx_{tx.id}"):
                    ok, msg, _ = WalletService.reject(tx.id)
                    if ok:
                        query_cache.invalidate(WALLET_TRANSACTIONS)
                    notify_result(ok, msg)
                    st.rerun()
