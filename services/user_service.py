# services/user_service.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from core.api_client import api_client, ApiError
from core.config import DEFAULT_MEMBER_TARGET
from core.image_ops import CroppedFile
from core.models import User, Payment, ROLE_MEMBER, ROLE_RESPONSIBLE_MEMBER, TRANSACTION_COLLECT
from core.utils import progress_percent, sort_by_date_desc, split_full_name

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for member accounts, profiles and terms acknowledgement."""

    @staticmethod
    def _fetch_users(path: str) -> Tuple[bool, str, List[User]]:
        try:
            users = [User.from_api(u) for u in api_client.get(path) or []]
            return True, f"Retrieved {len(users)} users.", users
        except ApiError as e:
            logger.error(f"Error retrieving users from {path}: {e}")
            return False, f"Error retrieving users: {e}", []

    @staticmethod
    def get_users() -> Tuple[bool, str, List[User]]:
        """Users visible to the caller (restricted by role on the backend)."""
        return UserService._fetch_users("/users/")

    @staticmethod
    def get_all_public() -> Tuple[bool, str, List[User]]:
        """Every member, for public lists such as the terms acknowledgement list."""
        return UserService._fetch_users("/users/all_public/")

    @staticmethod
    def get_my_members() -> Tuple[bool, str, List[User]]:
        """Members assigned to the signed-in responsible member."""
        return UserService._fetch_users("/users/my_members/")

    @staticmethod
    def get_me() -> Tuple[bool, str, Optional[User]]:
        try:
            return True, "Profile loaded.", User.from_api(api_client.get("/users/me/") or {})
        except ApiError as e:
            logger.error(f"Error loading current user: {e}")
            return False, f"Error loading profile: {e}", None

    @staticmethod
    def responsible_members(users: List[User]) -> List[User]:
        return [u for u in users if u.role == ROLE_RESPONSIBLE_MEMBER]

    @staticmethod
    def build_user_form(
        form: Dict[str, Any],
        photo: Optional[CroppedFile] = None,
        include_password: bool = False,
        send_blank: bool = False,
    ) -> Tuple[Dict[str, str], Optional[Dict[str, Tuple[str, bytes, str]]]]:
        """
        Convert the user form into multipart (data, files).

        The full name is split into first_name / last_name on the first space.
        Optional fields are only sent when filled in. With send_blank, email and
        phone are always sent so clearing them removes the stored value.
        """
        first_name, last_name = split_full_name(form.get("name", ""))
        data = {
            "first_name": first_name,
            "last_name": last_name,
        }
        if form.get("username"):
            data["username"] = str(form["username"])
        for key in ("email", "phone"):
            if form.get(key) or send_blank:
                data[key] = str(form.get(key) or "")
        for key in ("role", "marital_status"):
            if form.get(key):
                data[key] = form[key]
        if form.get("assigned_monthly_amount") not in (None, ""):
            data["assigned_monthly_amount"] = str(form["assigned_monthly_amount"])
        if form.get("responsible_member"):
            data["responsible_member"] = str(form["responsible_member"])
        if include_password and form.get("password"):
            data["password"] = form["password"]

        files = {"profile_photo": photo.as_upload()} if photo else None
        return data, files

    @staticmethod
    def create_user(form: Dict[str, Any], photo: Optional[CroppedFile] = None) -> Tuple[bool, str, Optional[User]]:
        if not form.get("password"):
            return False, "Password is required", None
        data, files = UserService.build_user_form(form, photo, include_password=True)
        try:
            result = api_client.post("/users/", data=data, files=files or {})
            logger.info(f"User '{data.get('username')}' created")
            return True, "User created successfully", User.from_api(result or {})
        except ApiError as e:
            logger.error(f"Error creating user '{data.get('username')}': {e}")
            message = "Username already exists" if e.has_field_error("username") else "Failed to create user"
            return False, message, None

    @staticmethod
    def update_user(
        user_id: str,
        form: Dict[str, Any],
        photo: Optional[CroppedFile] = None,
        send_blank: bool = False,
    ) -> Tuple[bool, str, Optional[User]]:
        data, files = UserService.build_user_form(form, photo, send_blank=send_blank)
        try:
            result = api_client.patch(f"/users/{user_id}/", data=data, files=files or {})
            logger.info(f"User {user_id} updated")
            return True, "User updated successfully", User.from_api(result or {})
        except ApiError as e:
            logger.error(f"Error updating user {user_id}: {e}")
            return False, "Failed to update user", None

    @staticmethod
    def update_profile(
        user: User,
        form: Dict[str, Any],
        photo: Optional[CroppedFile] = None,
    ) -> Tuple[bool, str, Optional[User]]:
        """Self-service profile edit; role and targets are not editable here."""
        profile_form = {
            key: form.get(key, "")
            for key in ("name", "username", "email", "phone", "marital_status")
        }
        success, message, updated = UserService.update_user(user.id, profile_form, photo, send_blank=True)
        if success:
            return True, "Profile updated successfully", updated
        return False, "Failed to update profile", None

    @staticmethod
    def delete_user(user_id: str) -> Tuple[bool, str, Optional[str]]:
        try:
            api_client.delete(f"/users/{user_id}/")
            logger.info(f"User {user_id} deleted")
            return True, "User removed from system", user_id
        except ApiError as e:
            logger.error(f"Error deleting user {user_id}: {e}")
            return False, f"Failed to delete user: {e}", None

    @staticmethod
    def acknowledge_terms(user_agent: str = "") -> Tuple[bool, str, Optional[Dict[str, Any]]]:
        try:
            result = api_client.post("/terms/", {"user_agent": user_agent})
            return True, "Terms acknowledged.", result
        except ApiError as e:
            logger.error(f"Error recording terms acknowledgement: {e}")
            return False, f"Could not record acknowledgement: {e}", None

    @staticmethod
    def acknowledgement_lists(
        users: List[User],
        acknowledgements: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> Dict[str, List[Dict[str, Any]]]:
        """
        Signature lists for the Terms of Use page: responsible members and members,
        each marked acknowledged from the backend flag or this session's records.
        """
        acknowledgements = acknowledgements or {}

        def row(user):
            record = acknowledgements.get(user.id) or {}
            return {
                "id": user.id,
                "name": user.name,
                "acknowledged": user.has_acknowledged_terms or bool(record.get("acknowledged")),
                "date": record.get("date"),
            }

        return {
            "responsible": [row(u) for u in users if u.role == ROLE_RESPONSIBLE_MEMBER],
            "members": [row(u) for u in users if u.role == ROLE_MEMBER],
        }

    @staticmethod
    def profile_statistics(
        user: User,
        payments: List[Payment],
        system_target: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Paid / target / progress figures for the profile page."""
        own_payments = [p for p in payments if str(p.user) == str(user.id)]
        total_paid = sum(p.amount for p in own_payments if p.transaction_type == TRANSACTION_COLLECT)

        if user.assigned_monthly_amount > 0:
            target = user.assigned_monthly_amount
        else:
            target = float(system_target or 0)

        ordered = sort_by_date_desc(own_payments, "date")
        return {
            "total_paid": total_paid,
            "target": target,
            "to_collect": target - total_paid,
            "progress": progress_percent(total_paid, target),
            "payment_count": len(own_payments),
            "last_payment": ordered[0] if ordered else None,
        }

    @staticmethod
    def default_assigned_amount(user: Optional[User]) -> float:
        if user and user.assigned_monthly_amount:
            return user.assigned_monthly_amount
        return float(DEFAULT_MEMBER_TARGET)
