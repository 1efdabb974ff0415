# services/wallet_service.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from core.api_client import api_client, ApiError
from core.models import WalletTransaction, WALLET_DEPOSIT, WALLET_WITHDRAWAL
from core.utils import sort_by_date_desc

logger = logging.getLogger(__name__)

PAYMENT_METHODS = {
    "bank_transfer": "Bank Transfer",
    "upi": "UPI Payment",
    "cash": "Cash",
    "cheque": "Cheque",
}
DEFAULT_PAYMENT_METHOD = "bank_transfer"


class WalletService:
    """Wallet deposits are submitted by members and verified by an admin."""

    @staticmethod
    def get_transactions() -> Tuple[bool, str, List[WalletTransaction]]:
        try:
            items = [WalletTransaction.from_api(t) for t in api_client.get("/wallet-transactions/") or []]
            return True, f"Retrieved {len(items)} wallet transactions.", items
        except ApiError as e:
            logger.error(f"Error retrieving wallet transactions: {e}")
            return False, f"Error retrieving wallet transactions: {e}", []

    @staticmethod
    def _create(
        transaction_type: str,
        amount: Optional[float],
        payment_method: str,
        transaction_id: str,
        notes: Optional[str] = None,
    ) -> Tuple[bool, str, Optional[WalletTransaction]]:
        if not amount or float(amount) <= 0:
            return False, "Please enter a valid amount.", None
        if not (transaction_id or "").strip():
            return False, "Transaction ID is required.", None

        try:
            result = api_client.post("/wallet-transactions/", {
                "amount": float(amount),
                "payment_method": payment_method or DEFAULT_PAYMENT_METHOD,
                "transaction_id": transaction_id.strip(),
                "notes": notes or "",
                "transaction_type": transaction_type,
            })
            logger.info(f"Wallet {transaction_type.lower()} of {amount} submitted")
            return True, "Submitted for verification.", WalletTransaction.from_api(result or {})
        except ApiError as e:
            logger.error(f"Error submitting wallet {transaction_type.lower()}: {e}")
            return False, e.detail or "Failed to submit transaction", None

    @staticmethod
    def create_deposit(amount, payment_method, transaction_id, notes=None):
        return WalletService._create(WALLET_DEPOSIT, amount, payment_method, transaction_id, notes)

    @staticmethod
    def create_withdrawal(amount, payment_method, transaction_id, notes=None):
        return WalletService._create(WALLET_WITHDRAWAL, amount, payment_method, transaction_id, notes)

    @staticmethod
    def approve(transaction_id: str) -> Tuple[bool, str, Optional[Dict[str, Any]]]:
        """Approval turns the deposit into a collection on the backend."""
        try:
            result = api_client.post(f"/wallet-transactions/{transaction_id}/approve/")
            logger.info(f"Wallet transaction {transaction_id} approved")
            return True, "Deposit verified and added to collections.", result
        except ApiError as e:
            logger.error(f"Error approving wallet transaction {transaction_id}: {e}")
            return False, "Failed to approve transaction", None

    @staticmethod
    def reject(transaction_id: str) -> Tuple[bool, str, Optional[Dict[str, Any]]]:
        try:
            result = api_client.post(f"/wallet-transactions/{transaction_id}/reject/")
            logger.info(f"Wallet transaction {transaction_id} rejected")
            return True, "Deposit request rejected.", result
        except ApiError as e:
            logger.error(f"Error rejecting wallet transaction {transaction_id}: {e}")
            return False, "Failed to reject transaction", None

    @staticmethod
    def pending(transactions: List[WalletTransaction]) -> List[WalletTransaction]:
        return sort_by_date_desc([t for t in transactions if t.status == "PENDING"], "date")

    @staticmethod
    def payment_method_label(method: str) -> str:
        return PAYMENT_METHODS.get(method, (method or "").replace("_", " "))
