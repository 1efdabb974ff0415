# views/dashboard.py
import streamlit as st

from core.auth import auth_manager, can_share_announcements
from core.query_cache import query_cache, DASHBOARD_STATS, RECENT_REQUESTS
from core.utils import format_inr, format_date
from services.dashboard_service import DashboardService
from components.shared_components import render_stat_card


def _render_announcements(announcements, user):
    st.subheader("💒 Wedding Announcements")
    st.caption("Latest wedding announcements and upcoming celebrations")

    if can_share_announcements(user):
        with st.expander("📤 Share contribution template"):
            st.caption("Use this template to share wedding announcements and collect contributions from members")
            message = DashboardService.contribution_message()
            st.code(message, language=None)
            st.link_button("Share on WhatsApp", DashboardService.whatsapp_share_url(message))

    if not announcements:
        st.info("No wedding announcements yet. They will appear here when members share their special news.")
        return

    for announcement in announcements:
        with st.container(border=True):
            st.markdown(f"**{announcement.get('title', '')}**")
            st.write(announcement.get("message", ""))
            st.caption(f"Announced: {format_date(announcement.get('created_at'))}")


def _render_recent_requests(requests):
    st.subheader("🕒 Recent Requests")
    if not requests:
        st.info("No fund requests yet.")
        return

    for request in requests:
        col1, col2, col3 = st.columns([3, 2, 2])
        with col1:
            st.markdown(f"**{request.user_name or 'Member'}**")
            st.caption(request.reason)
        with col2:
            st.write(format_inr(request.amount))
            st.caption(format_date(request.requested_date))
        with col3:
            st.write(DashboardService.request_status_label(request))


def show_dashboard_page():
    user = auth_manager.current_user
    st.header("📊 Dashboard")
    st.markdown(f"Welcome back, **{user.name}**.")

    success, message, stats = query_cache.fetch(DASHBOARD_STATS, DashboardService.get_stats)
    if not success:
        st.error(message)
        return
    summary = DashboardService.summarize(stats)

    col1, col2, col3 = st.columns(3)
    with col1:
        render_stat_card("Fund Balance", format_inr(summary["balance"]), "Available for disbursement", "💰")
    with col2:
        render_stat_card("Total Collected", format_inr(summary["collected"]), "All contributions", "📥")
    with col3:
        render_stat_card("Total Disbursed", format_inr(summary["disbursed"]), "Paid to members", "📤")

    st.divider()
    left, right = st.columns(2)

    with left:
        st.subheader("👥 Members")
        c1, c2, c3 = st.columns(3)
        c1.metric("Total", summary["total_members"])
        c2.metric("Married", summary["married"])
        c3.metric("Unmarried", summary["unmarried"])

    with right:
        st.subheader("🏆 Top Teams")
        if not summary["top_teams"]:
            st.info("No team data yet.")
        for rank, team in enumerate(summary["top_teams"], start=1):
            info = DashboardService.rank_info(rank)
            card = DashboardService.top_team_card(team)
            with st.container(border=True):
                st.markdown(f"{info['icon']} **{card['leader_name']} Team** · {info['label']}")
                st.caption(f"{card['member_count']} members · Paid {format_inr(card['total_paid'])} "
                           f"of {format_inr(card['target'])}")
                st.progress(min(max(card["progress"], 0.0), 100.0) / 100)

    st.divider()
    _render_announcements(summary["announcements"], user)

    st.divider()
    _, _, recent = query_cache.fetch(RECENT_REQUESTS, DashboardService.get_recent_requests)
    _render_recent_requests(recent)
