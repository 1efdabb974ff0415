# Views module for the CBMS Marriage Fund app
# Rendered from app.py; kept out of pages/ so Streamlit does not add its own navigation
from .login import show_login_page
from .dashboard import show_dashboard_page
from .payments import show_payments_page
from .wallet_approvals import show_wallet_approvals_page
from .team import show_team_page
from .fund_requests import show_fund_requests_page
from .manage_users import show_manage_users_page
from .notifications import show_notifications_page
from .profile import show_profile_page
from .diagnostics import show_diagnostics_page
from .terms import show_terms_page

__all__ = [
    'show_login_page',
    'show_dashboard_page',
    'show_payments_page',
    'show_wallet_approvals_page',
    'show_team_page',
    'show_fund_requests_page',
    'show_manage_users_page',
    'show_notifications_page',
    'show_profile_page',
    'show_diagnostics_page',
    'show_terms_page'
]
