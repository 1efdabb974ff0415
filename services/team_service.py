# services/team_service.py
import logging
from typing import Any, Dict, List, Tuple

from core.api_client import api_client, ApiError
from core.utils import progress_percent

logger = logging.getLogger(__name__)


def _amount(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


class TeamService:
    """
    Teams are a responsible member plus the members assigned to them.
    The /teams/ payload is used as-is (plain dicts): each team has
    `responsible_member`, `members` and optional leader/team totals.
    """

    @staticmethod
    def get_team_structure() -> Tuple[bool, str, List[Dict[str, Any]]]:
        try:
            teams = api_client.get("/teams/") or []
            return True, f"Retrieved {len(teams)} teams.", teams
        except ApiError as e:
            logger.error(f"Error retrieving team structure: {e}")
            return False, f"Error retrieving teams: {e}", []

    @staticmethod
    def fund_stats(stats: Dict[str, Any]) -> Dict[str, float]:
        """Fund-wide totals derived from the dashboard stats payload."""
        stats = stats or {}
        demographics = stats.get("demographics") or {}
        financials = stats.get("financials") or {}

        total_users = (demographics.get("married") or 0) + (demographics.get("unmarried") or 0)
        total_marriage_amount = _amount(stats.get("system_target"))
        total_paid = _amount(financials.get("collected"))

        return {
            "total_users": total_users,
            "total_marriage_amount": total_marriage_amount,
            "per_person_target": total_marriage_amount / total_users if total_users > 0 else 0.0,
            "total_paid": total_paid,
            "spend": _amount(financials.get("disbursed")),
            "balance": _amount(financials.get("balance")),
            "to_collect": max(0.0, total_marriage_amount - total_paid),
            "progress": progress_percent(total_paid, total_marriage_amount),
        }

    @staticmethod
    def team_progress(team: Dict[str, Any], global_target: float) -> Dict[str, Any]:
        members = team.get("members") or []

        leader_target = _amount(team.get("leaderTotalTarget")) or global_target
        leader_paid = _amount(team.get("leaderTotalPaid"))

        team_target = _amount(team.get("teamTotalTarget")) or (len(members) + 1) * global_target
        team_paid = _amount(team.get("teamTotalPaid"))

        member_rows = []
        for member in members:
            paid = _amount(member.get("total_paid"))
            member_rows.append({
                "id": str(member.get("id", "")),
                "name": member.get("name", ""),
                "marital_status": member.get("marital_status", ""),
                "paid": paid,
                "target": global_target,
                "to_collect": max(0.0, global_target - paid),
                "progress": progress_percent(paid, global_target),
            })

        return {
            "size": len(members) + 1,
            "leader_target": leader_target,
            "leader_paid": leader_paid,
            "leader_to_collect": max(0.0, leader_target - leader_paid),
            "leader_progress": progress_percent(leader_paid, leader_target),
            "team_target": team_target,
            "team_paid": team_paid,
            "team_to_collect": max(0.0, team_target - team_paid),
            "team_progress": progress_percent(team_paid, team_target),
            "members": member_rows,
        }

    @staticmethod
    def filter_teams(teams: List[Dict[str, Any]], term: str) -> List[Dict[str, Any]]:
        term = (term or "").strip().lower()
        if not term:
            return list(teams)

        def matches(team):
            leader = (team.get("responsible_member") or {}).get("name", "")
            if term in leader.lower():
                return True
            return any(term in (m.get("name") or "").lower() for m in team.get("members") or [])

        return [team for team in teams if matches(team)]
