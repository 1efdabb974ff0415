# core/auth.py
import logging
from collections.abc import MutableMapping
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, Optional

from .api_client import ApiClient, ApiError, USER_KEY, fix_media_url, api_client
from .config import TERMS_ACK_KEY, TERMS_ALL_ACK_KEY
from .models import User

logger = logging.getLogger(__name__)


def _user_from_payload(payload: Dict[str, Any]) -> User:
    user = User.from_api(payload)
    return replace(user, profile_photo=fix_media_url(user.profile_photo) or None)


class AuthManager:
    """
    Token-storage wrapper around the /token/ endpoint.
    Tokens and the signed-in user live in the client's token store
    (st.session_state in the running app).
    """

    def __init__(self, client: ApiClient, store: Optional[MutableMapping] = None):
        self.client = client
        self.store = store if store is not None else client.token_store

    @property
    def current_user(self) -> Optional[User]:
        return self.store.get(USER_KEY)

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def login(self, username: str, password: str) -> bool:
        # Start from a clean slate so no stale token is ever attached
        self.logout()

        try:
            response = self.client.post(
                "/token/",
                {"username": username, "password": password},
                authenticate=False,
            )
            self.client.set_tokens(response.get("access"), response.get("refresh"))

            user_payload = response.get("user")
            if not user_payload:
                user_payload = self.client.get("/users/me/")

            self.store[USER_KEY] = _user_from_payload(user_payload)
            logger.info(f"User '{username}' signed in")
            return True

        except (ApiError, AttributeError) as e:
            logger.error(f"Login failed for '{username}': {e}")
            self.logout()
            return False

    def restore_session(self) -> Optional[User]:
        """Reload the profile for a stored token, dropping the session if the token is no longer valid."""
        if self.current_user is not None or not self.client.access_token:
            return self.current_user
        try:
            self.store[USER_KEY] = _user_from_payload(self.client.get("/users/me/"))
        except ApiError as e:
            logger.warning(f"Session expired: {e}")
            self.logout()
        return self.current_user

    def refresh_current_user(self) -> Optional[User]:
        """Refetch the signed-in user after a profile edit."""
        self.store.pop(USER_KEY, None)
        return self.restore_session()

    def logout(self):
        self.client.clear_tokens()
        self.store.pop(USER_KEY, None)

    # ==================== TERMS OF USE ====================
    def terms_acknowledgement(self) -> Optional[Dict[str, Any]]:
        """The signed-in user's {acknowledged, date, user_name, user_id} record, if any."""
        record = self.store.get(TERMS_ACK_KEY)
        user = self.current_user
        if not record or record.get("user_id") != (user.id if user else None):
            return None
        return record

    def has_acknowledged_terms(self) -> bool:
        user = self.current_user
        if user is not None and user.has_acknowledged_terms:
            return True
        record = self.terms_acknowledgement()
        return bool(record and record.get("acknowledged"))

    def all_acknowledgements(self) -> Dict[str, Dict[str, Any]]:
        """Acknowledgements recorded in this session, keyed by user id."""
        return self.store.get(TERMS_ALL_ACK_KEY) or {}

    def acknowledge_terms(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        user = self.current_user
        date = (now or datetime.now()).isoformat(timespec="seconds")
        user_name = user.name if user else ""
        record = {
            "acknowledged": True,
            "date": date,
            "user_name": user_name,
            "user_id": user.id if user else None,
        }
        self.store[TERMS_ACK_KEY] = record

        acknowledgements = dict(self.all_acknowledgements())
        acknowledgements[record["user_id"] or ""] = {"acknowledged": True, "date": date, "user_name": user_name}
        self.store[TERMS_ALL_ACK_KEY] = acknowledgements
        logger.info(f"Terms of Use acknowledged by '{user_name}'")
        return record


# ==================== ROLE CAPABILITIES ====================
def can_manage_requests(user: Optional[User]) -> bool:
    return bool(user) and (user.is_admin or user.is_responsible_member)


def can_request_funds(user: Optional[User]) -> bool:
    return bool(user) and (user.is_member or user.is_responsible_member)


def can_deposit_wallet(user: Optional[User]) -> bool:
    return can_request_funds(user)


def can_share_announcements(user: Optional[User]) -> bool:
    return can_manage_requests(user)


def can_manage_users(user: Optional[User]) -> bool:
    return bool(user) and user.is_admin


# Create a single global instance to be used across the application
auth_manager = AuthManager(api_client)
