# services/fund_request_service.py
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from core.api_client import api_client, ApiError
from core.config import APPROVAL_DEFAULT_DAYS, DEFAULT_MAX_REQUEST_AMOUNT
from core.models import (
    FundRequest,
    REQUEST_APPROVED,
    REQUEST_DECLINED,
    REQUEST_PENDING,
    PAYMENT_STATUS_PAID,
    PAYMENT_STATUS_PARTIAL,
)
from core.utils import days_from, format_inr, remaining_days, sort_by_date_desc

logger = logging.getLogger(__name__)

TAB_ALL = "all"
TAB_MY = "my"


class FundRequestService:
    """Service layer for marriage fund requests and their approval workflow."""

    @staticmethod
    def get_requests() -> Tuple[bool, str, List[FundRequest]]:
        """All requests visible to the caller (the backend filters by role)."""
        try:
            requests = [FundRequest.from_api(r) for r in api_client.get("/fund-requests/") or []]
            return True, f"Retrieved {len(requests)} requests.", requests
        except ApiError as e:
            logger.error(f"Error retrieving fund requests: {e}")
            return False, f"Error retrieving fund requests: {e}", []

    @staticmethod
    def validate_request_form(
        amount: Optional[float],
        reason: str,
        detailed_reason: str,
        max_amount: Optional[float] = None,
    ) -> Dict[str, str]:
        errors = {}
        max_amount = max_amount or DEFAULT_MAX_REQUEST_AMOUNT
        if not amount or float(amount) <= 0:
            errors["amount"] = "Amount must be greater than 0"
        elif float(amount) > max_amount:
            errors["amount"] = f"Amount cannot exceed {format_inr(max_amount)}"
        if not (reason or "").strip():
            errors["reason"] = "Please provide a reason"
        if not (detailed_reason or "").strip():
            errors["detailed_reason"] = "Please describe your request"
        return errors

    @staticmethod
    def create_request(amount: float, reason: str, detailed_reason: str) -> Tuple[bool, str, Optional[FundRequest]]:
        try:
            result = api_client.post("/fund-requests/", {
                "amount": float(amount),
                "reason": reason,
                "detailed_reason": detailed_reason,
            })
            logger.info(f"Fund request submitted for {amount}")
            return True, "Fund request submitted successfully", FundRequest.from_api(result or {})
        except ApiError as e:
            logger.error(f"Error submitting fund request: {e}")
            return False, e.detail or "Failed to submit request", None

    @staticmethod
    def approve_request(request_id: str, payment_date: date) -> Tuple[bool, str, Optional[Dict[str, Any]]]:
        """Approve and schedule the payout; the backend expects payment_date as YYYY-MM-DD."""
        if not payment_date:
            return False, "Please choose a payment date.", None
        try:
            result = api_client.post(f"/fund-requests/{request_id}/approve/", {
                "payment_date": payment_date.isoformat()[:10],
            })
            logger.info(f"Fund request {request_id} approved for {payment_date}")
            return True, "Fund request approved and payment scheduled.", result
        except ApiError as e:
            logger.error(f"Error approving fund request {request_id}: {e}")
            return False, "Failed to approve request", None

    @staticmethod
    def decline_request(request_id: str, reason: str) -> Tuple[bool, str, Optional[Dict[str, Any]]]:
        if not (reason or "").strip():
            return False, "A reason is required to decline a request.", None
        try:
            result = api_client.post(f"/fund-requests/{request_id}/decline/", {"reason": reason})
            logger.info(f"Fund request {request_id} declined")
            return True, "Fund request declined", result
        except ApiError as e:
            logger.error(f"Error declining fund request {request_id}: {e}")
            return False, "Failed to decline request", None

    @staticmethod
    def default_payment_date(today: Optional[date] = None) -> date:
        return days_from(today or date.today(), APPROVAL_DEFAULT_DAYS)

    @staticmethod
    def statistics(requests: List[FundRequest]) -> Dict[str, float]:
        def of_status(status):
            return [r for r in requests if (r.status or REQUEST_PENDING).upper() == status]

        pending = of_status(REQUEST_PENDING)
        approved = of_status(REQUEST_APPROVED)
        declined = of_status(REQUEST_DECLINED)
        return {
            "total": len(requests),
            "pending": len(pending),
            "approved": len(approved),
            "declined": len(declined),
            "total_amount": sum(r.amount for r in requests),
            "approved_amount": sum(r.amount for r in approved),
            "pending_amount": sum(r.amount for r in pending),
        }

    @staticmethod
    def filter_requests(requests: List[FundRequest], tab: str, user_id: Optional[str]) -> List[FundRequest]:
        """The 'my' tab keeps only the caller's own requests; both tabs are newest first."""
        data = list(requests)
        if tab == TAB_MY:
            data = [r for r in data if str(r.user) == str(user_id)]
        return sort_by_date_desc(data, "requested_date")

    @staticmethod
    def status_badge(request: FundRequest, today: Optional[datetime] = None) -> str:
        status = (request.status or REQUEST_PENDING).upper()
        payment_status = (request.payment_status or REQUEST_PENDING).upper()

        if status == REQUEST_APPROVED:
            if payment_status == PAYMENT_STATUS_PAID:
                return f"Paid ({format_inr(request.paid_amount or request.amount)})"
            if payment_status == PAYMENT_STATUS_PARTIAL:
                return "Partial"
            days = remaining_days(request.scheduled_payment_date, today) if request.scheduled_payment_date else 0
            return f"{days} days left" if days > 0 else "Due"
        if status == REQUEST_DECLINED:
            return "Declined"
        return "Pending"
