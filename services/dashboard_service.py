# services/dashboard_service.py
import logging
from typing import Any, Dict, List, Tuple
from urllib.parse import quote

from core.api_client import api_client, ApiError
from core.config import RECENT_REQUESTS_LIMIT, TOP_TEAMS_LIMIT, CONTRIBUTION_AMOUNT
from core.models import (
    FundRequest,
    REQUEST_APPROVED,
    REQUEST_PENDING,
    PAYMENT_STATUS_PAID,
    PAYMENT_STATUS_PARTIAL,
)
from core.utils import format_inr, sort_by_date_desc

logger = logging.getLogger(__name__)

WHATSAPP_SHARE_URL = "https://wa.me/?text="

RANKS = {
    1: {"icon": "👑", "label": "Champion"},
    2: {"icon": "🏆", "label": "Runner-Up"},
    3: {"icon": "🥉", "label": "Third Place"},
}
DEFAULT_RANK = {"icon": "🏅", "label": "Top Team"}


class DashboardService:
    """Service layer for the dashboard aggregates."""

    @staticmethod
    def get_stats() -> Tuple[bool, str, Dict[str, Any]]:
        try:
            stats = api_client.get("/dashboard/stats/") or {}
            return True, "Statistics loaded.", stats
        except ApiError as e:
            logger.error(f"Error loading dashboard stats: {e}")
            return False, f"Error loading dashboard statistics: {e}", {}

    @staticmethod
    def get_recent_requests(limit: int = RECENT_REQUESTS_LIMIT) -> Tuple[bool, str, List[FundRequest]]:
        """Newest fund requests first, top `limit` only."""
        try:
            requests = [FundRequest.from_api(r) for r in api_client.get("/fund-requests/") or []]
            recent = sort_by_date_desc(requests, "requested_date")[:limit]
            return True, f"Retrieved {len(recent)} recent requests.", recent
        except ApiError as e:
            logger.error(f"Error loading recent requests: {e}")
            return False, f"Error loading recent requests: {e}", []

    @staticmethod
    def summarize(stats: Dict[str, Any]) -> Dict[str, Any]:
        """Map the stats payload onto the numbers the dashboard shows."""
        stats = stats or {}
        financials = stats.get("financials") or {}
        demographics = stats.get("demographics") or {}
        married = demographics.get("married") or 0
        unmarried = demographics.get("unmarried") or 0
        return {
            "balance": financials.get("balance") or 0,
            "collected": financials.get("collected") or 0,
            "disbursed": financials.get("disbursed") or 0,
            "married": married,
            "unmarried": unmarried,
            "total_members": married + unmarried,
            "top_teams": (stats.get("teams") or [])[:TOP_TEAMS_LIMIT],
            "announcements": stats.get("announcements") or [],
            "system_target": stats.get("system_target") or 0,
        }

    @staticmethod
    def request_status_label(request: FundRequest) -> str:
        status = (request.status or REQUEST_PENDING).upper()
        payment_status = (request.payment_status or REQUEST_PENDING).upper()

        if status == REQUEST_APPROVED:
            if payment_status == PAYMENT_STATUS_PAID:
                return "Paid"
            if payment_status == PAYMENT_STATUS_PARTIAL:
                return "Partial"
            return "Pending Payment"
        if status == REQUEST_PENDING:
            return "Under Review"
        return "Declined"

    @staticmethod
    def rank_info(rank: int) -> Dict[str, str]:
        return RANKS.get(rank, DEFAULT_RANK)

    @staticmethod
    def top_team_card(team: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize a top-team entry; the stats payload has used more than one shape."""
        team = team or {}
        leader = team.get("responsible_member") or {}
        members = team.get("members") or []

        def number(*keys):
            for key in keys:
                if team.get(key) is not None:
                    try:
                        return float(team[key])
                    except (TypeError, ValueError):
                        return 0.0
            return 0.0

        return {
            "leader_name": team.get("leader_name") or leader.get("name") or "Team",
            "member_count": team.get("member_count", len(members)),
            "total_paid": number("total_paid", "leaderTotalPaid"),
            "target": number("target", "teamTotalTarget"),
            "progress": number("progress", "teamProgress"),
        }

    @staticmethod
    def contribution_message(amount: float = CONTRIBUTION_AMOUNT) -> str:
        """Template admins share to collect contributions for an upcoming wedding."""
        contribution = format_inr(amount)
        return (
            "🎉 Wedding Announcement - Contribution Required\n\n"
            "Dear CBMS Family,\n\n"
            "We have exciting news! A wedding celebration is coming up and we need your support.\n\n"
            "📅 Wedding Date: [Wedding Date]\n"
            "👰🤵 Couple: [Couple Names]\n"
            f"💰 Contribution Amount: {contribution} per member\n\n"
            "This contribution helps us support our community members during their special moments. "
            "Your participation strengthens our bond as a family.\n\n"
            f"Please prepare your contribution of {contribution} and submit it through the "
            "CBMS Marriage Fund system.\n\n"
            "Thank you for your continued support and participation in our community fund.\n\n"
            "Best regards,\n"
            "CBMS Marriage Fund Team\n\n"
            "#CBMSFamily #WeddingCelebration #CommunitySupport"
        )

    @staticmethod
    def whatsapp_share_url(message: str) -> str:
        return WHATSAPP_SHARE_URL + quote(message, safe="")
