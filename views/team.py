# views/team.py
import streamlit as st

from core.query_cache import query_cache, TEAM_STRUCTURE, DASHBOARD_STATS, USERS
from core.api_client import fix_media_url
from core.utils import format_inr
from services.dashboard_service import DashboardService
from services.team_service import TeamService
from services.user_service import UserService
from components.shared_components import render_stat_card, render_progress


def _render_team_card(team, rank, progress, photos):
    info = DashboardService.rank_info(rank)
    leader = team.get("responsible_member") or {}

    with st.container(border=True):
        head, badge = st.columns([4, 1])
        with head:
            st.markdown(f"### {leader.get('name', 'Team')}'s Team")
            st.caption(f"{progress['size']} members")
        with badge:
            st.markdown(f"{info['icon']} **Rank #{rank}**")

        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Total Target", format_inr(progress["team_target"]))
        c2.metric("To Collect", format_inr(progress["team_to_collect"]))
        c3.metric("Total Paid", format_inr(progress["team_paid"]))
        c4.metric("Progress", f"{progress['team_progress']:.1f}%")
        st.progress(min(progress["team_progress"], 100.0) / 100)

        st.markdown("**Responsible Member**")
        photo_col, body_col = st.columns([1, 6])
        with photo_col:
            photo = photos.get(str(leader.get("id", "")))
            if photo:
                st.image(photo, width=48)
            else:
                st.markdown("🎖️")
        with body_col:
            render_progress(
                f"{leader.get('name', '')} · {leader.get('marital_status', '')}",
                progress["leader_paid"],
                progress["leader_target"],
                progress["leader_progress"],
            )

        if progress["members"]:
            with st.expander(f"Members ({len(progress['members'])})"):
                for member in progress["members"]:
                    photo_col, body_col = st.columns([1, 6])
                    with photo_col:
                        photo = photos.get(member["id"])
                        if photo:
                            st.image(photo, width=40)
                        else:
                            st.markdown("👤")
                    with body_col:
                        render_progress(member["name"], member["paid"], member["target"], member["progress"])


def show_team_page():
    st.header("👥 Team")
    st.markdown("Track how each team is doing against its collection target.")

    success, message, teams = query_cache.fetch(TEAM_STRUCTURE, TeamService.get_team_structure)
    if not success:
        st.error(message)
        return
    _, _, stats = query_cache.fetch(DASHBOARD_STATS, DashboardService.get_stats)
    _, _, users = query_cache.fetch(USERS, UserService.get_users)
    photos = {u.id: fix_media_url(u.profile_photo) for u in users if u.profile_photo}

    fund = TeamService.fund_stats(stats)
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        render_stat_card("Members", str(fund["total_users"]), icon="👥")
    with col2:
        render_stat_card("Marriage Fund Target", format_inr(fund["total_marriage_amount"]),
                         f"{format_inr(fund['per_person_target'])} per person", "🎯")
    with col3:
        render_stat_card("Total Paid", format_inr(fund["total_paid"]),
                         f"Spent {format_inr(fund['spend'])}", "💰")
    with col4:
        render_stat_card("Balance", format_inr(fund["balance"]),
                         f"To collect {format_inr(fund['to_collect'])}", "🏦")
    render_progress("Overall Progress", fund["total_paid"], fund["total_marriage_amount"], fund["progress"])

    st.divider()
    term = st.text_input("🔍 Search", placeholder="Search by member name", key="team_search")
    filtered = TeamService.filter_teams(teams, term)

    if not filtered:
        st.info("No teams match your search." if term else "No teams found.")
        return

    # Rank follows the backend's ordering, not the filtered list
    for team in filtered:
        rank = teams.index(team) + 1
        progress = TeamService.team_progress(team, fund["per_person_target"])
        _render_team_card(team, rank, progress, photos)
