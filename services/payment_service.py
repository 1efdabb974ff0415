# services/payment_service.py
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from core.api_client import api_client, ApiError
from core.config import DEFAULT_MEMBER_TARGET
from core.models import Payment, User, TRANSACTION_COLLECT, TRANSACTION_DISBURSE
from core.utils import normalize_time, parse_date

logger = logging.getLogger(__name__)

PAYMENT_TYPES = {
    "collect": TRANSACTION_COLLECT,
    "pay": TRANSACTION_DISBURSE,
}


class PaymentService:
    """Service layer for payment records. The backend filters lists by the caller's role."""

    @staticmethod
    def get_payments() -> Tuple[bool, str, List[Payment]]:
        try:
            payments = [Payment.from_api(p) for p in api_client.get("/payments/") or []]
            return True, f"Retrieved {len(payments)} payments.", payments
        except ApiError as e:
            logger.error(f"Error retrieving payments: {e}")
            return False, f"Error retrieving payments: {e}", []

    @staticmethod
    def get_available_members() -> Tuple[bool, str, List[User]]:
        """Members the current user may record payments for."""
        try:
            members = [User.from_api(u) for u in api_client.get("/users/") or []]
            return True, f"Retrieved {len(members)} members.", members
        except ApiError as e:
            logger.error(f"Error retrieving members: {e}")
            return False, f"Error retrieving members: {e}", []

    @staticmethod
    def build_payload(payment_data: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize a payment form into the shape the backend accepts."""
        payload = dict(payment_data)

        if not payload.get("transaction_type"):
            payload["transaction_type"] = TRANSACTION_COLLECT

        if payload.get("user") and not isinstance(payload["user"], str):
            payload["user"] = str(payload["user"])

        if isinstance(payload.get("time"), str) and payload["time"]:
            payload["time"] = normalize_time(payload["time"])

        request_id = payload.get("request_id")
        if request_id and isinstance(request_id, str):
            try:
                payload["request_id"] = int(request_id, 10)
            except ValueError:
                del payload["request_id"]

        return payload

    @staticmethod
    def create_payment(payment_data: Dict[str, Any]) -> Tuple[bool, str, Optional[Payment]]:
        try:
            result = api_client.post("/payments/", PaymentService.build_payload(payment_data))
            logger.info(f"Payment recorded for user {payment_data.get('user')}")
            return True, "Payment recorded.", Payment.from_api(result or {})
        except ApiError as e:
            logger.error(f"Error recording payment: {e}")
            return False, e.detail or "Failed to record payment", None

    @staticmethod
    def update_payment(payment_id: str, payment_data: Dict[str, Any]) -> Tuple[bool, str, Optional[Payment]]:
        try:
            result = api_client.patch(f"/payments/{payment_id}/", PaymentService.build_payload(payment_data))
            logger.info(f"Payment {payment_id} updated")
            return True, "Payment updated successfully", Payment.from_api(result or {})
        except ApiError as e:
            logger.error(f"Error updating payment {payment_id}: {e}")
            return False, "Failed to update payment", None

    @staticmethod
    def delete_payment(payment_id: str) -> Tuple[bool, str, Optional[str]]:
        try:
            api_client.delete(f"/payments/{payment_id}/")
            logger.info(f"Payment {payment_id} deleted")
            return True, "Payment deleted successfully", payment_id
        except ApiError as e:
            logger.error(f"Error deleting payment {payment_id}: {e}")
            return False, "Failed to delete payment", None

    @staticmethod
    def validate_payment_form(
        member: Optional[str],
        amount: Optional[float],
        payment_date: Any,
        payment_type: Optional[str],
        is_member: bool,
    ) -> Dict[str, str]:
        """Returns field -> error message; empty when the form is valid."""
        errors = {}
        if not member and not is_member:
            errors["member"] = "Please select a member"
        if not amount or float(amount) <= 0:
            errors["amount"] = "Amount must be greater than 0"
        if not payment_date:
            errors["date"] = "Please select the payment date"
        if not payment_type:
            errors["payment_type"] = "Please select payment type"
        return errors

    @staticmethod
    def payment_type_to_transaction(payment_type: str) -> str:
        return PAYMENT_TYPES.get(payment_type, TRANSACTION_COLLECT)

    @staticmethod
    def allowed_payment_types(user: Optional[User]) -> List[str]:
        """Only admins disburse; responsible members can only collect."""
        if user is not None and user.is_admin:
            return list(PAYMENT_TYPES)
        return ["collect"]

    # ==================== MEMBER TARGETS ====================
    @staticmethod
    def member_target(member: User, system_target: Optional[float] = None) -> float:
        """A member's own assigned amount wins; otherwise the system-wide target."""
        if member.assigned_monthly_amount > 0:
            return member.assigned_monthly_amount
        return float(system_target or DEFAULT_MEMBER_TARGET)

    @staticmethod
    def member_total_collected(payments: List[Payment], member_id: str) -> float:
        return sum(
            p.amount for p in payments
            if str(p.user) == str(member_id) and p.transaction_type == TRANSACTION_COLLECT
        )

    @staticmethod
    def member_remaining(member: User, payments: List[Payment], system_target: Optional[float] = None) -> float:
        target = PaymentService.member_target(member, system_target)
        collected = PaymentService.member_total_collected(payments, member.id)
        return max(0.0, target - collected)

    @staticmethod
    def summarize(payments: List[Payment], today: Optional[date] = None) -> Dict[str, float]:
        today = today or date.today()
        collected = sum(p.amount for p in payments if p.transaction_type == TRANSACTION_COLLECT)
        disbursed = sum(p.amount for p in payments if p.transaction_type == TRANSACTION_DISBURSE)

        this_month = []
        for p in payments:
            paid_on = parse_date(p.date)
            if paid_on and paid_on.year == today.year and paid_on.month == today.month:
                this_month.append(p)

        return {
            "count": len(payments),
            "collected": collected,
            "disbursed": disbursed,
            "net": collected - disbursed,
            "this_month_count": len(this_month),
            "this_month_total": sum(p.amount for p in this_month),
            "average": (collected + disbursed) / len(payments) if payments else 0.0,
        }
