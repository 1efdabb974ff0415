# Services module for the CBMS Marriage Fund app
# Business logic layer separated from UI

from .dashboard_service import DashboardService
from .payment_service import PaymentService
from .fund_request_service import FundRequestService
from .user_service import UserService
from .team_service import TeamService
from .notification_service import NotificationService
from .wallet_service import WalletService
from .diagnostics_service import DiagnosticsService
from .image_service import ImageService

__all__ = [
    'DashboardService',
    'PaymentService',
    'FundRequestService',
    'UserService',
    'TeamService',
    'NotificationService',
    'WalletService',
    'DiagnosticsService',
    'ImageService'
]
