# core/models.py
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

# ==================== ENUMERATIONS ====================
ROLE_ADMIN = "admin"
ROLE_RESPONSIBLE_MEMBER = "responsible_member"
ROLE_MEMBER = "member"
USER_ROLES = [ROLE_ADMIN, ROLE_RESPONSIBLE_MEMBER, ROLE_MEMBER]

MARITAL_STATUSES = ["Married", "Unmarried"]

TRANSACTION_COLLECT = "COLLECT"
TRANSACTION_DISBURSE = "DISBURSE"

REQUEST_PENDING = "PENDING"
REQUEST_APPROVED = "APPROVED"
REQUEST_DECLINED = "DECLINED"

PAYMENT_STATUS_PENDING = "PENDING"
PAYMENT_STATUS_PARTIAL = "PARTIAL"
PAYMENT_STATUS_PAID = "PAID"

NOTIFICATION_TYPES = ["INFO", "SUCCESS", "WARNING", "ERROR", "PAYMENT", "WEDDING", "ANNOUNCEMENT"]
NOTIFICATION_PRIORITIES = ["LOW", "MEDIUM", "HIGH"]

WALLET_DEPOSIT = "DEPOSIT"
WALLET_WITHDRAWAL = "WITHDRAWAL"


def _to_float(value: Any) -> float:
    """The API sends decimals as strings ("5000.00"); treat junk as zero."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _known(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in (data or {}).items() if k in names}


@dataclass
class User:
    id: str
    username: str
    name: str = ""
    role: str = ROLE_MEMBER
    marital_status: str = "Unmarried"
    assigned_monthly_amount: float = 0.0
    responsible_member_id: Optional[str] = None
    responsible_member_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    profile_photo: Optional[str] = None
    date_joined: Optional[str] = None
    has_acknowledged_terms: bool = False

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "User":
        data = dict(data or {})
        name = data.get("name") or " ".join(
            part for part in (data.get("first_name"), data.get("last_name")) if part
        ) or data.get("username", "")
        responsible_id = data.get("responsible_member_id", data.get("responsible_member"))
        values = _known(cls, data)
        values.update(
            id=str(data.get("id", "")),
            username=data.get("username", ""),
            name=name,
            assigned_monthly_amount=_to_float(data.get("assigned_monthly_amount")),
            responsible_member_id=_to_str(responsible_id) if responsible_id not in ("", None) else None,
            has_acknowledged_terms=bool(data.get("has_acknowledged_terms")),
        )
        return cls(**values)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_responsible_member(self) -> bool:
        return self.role == ROLE_RESPONSIBLE_MEMBER

    @property
    def is_member(self) -> bool:
        return self.role == ROLE_MEMBER

    @property
    def role_label(self) -> str:
        return self.role.replace("_", " ")

    @property
    def initial(self) -> str:
        return self.name[:1].upper() if self.name else "U"


@dataclass
class Payment:
    id: str
    user: str
    amount: float
    date: str = ""
    time: str = ""
    user_name: str = ""
    recorded_by: Optional[str] = None
    recorded_by_name: str = ""
    transaction_type: str = TRANSACTION_COLLECT
    notes: str = ""
    created_at: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Payment":
        values = _known(cls, data)
        values.update(
            id=str(data.get("id", "")),
            user=str(data.get("user", "")),
            amount=_to_float(data.get("amount")),
            recorded_by=_to_str(data.get("recorded_by")),
            notes=data.get("notes") or "",
        )
        return cls(**values)

    @property
    def is_collection(self) -> bool:
        return self.transaction_type == TRANSACTION_COLLECT


@dataclass
class FundRequest:
    id: str
    user: str
    amount: float
    reason: str = ""
    detailed_reason: str = ""
    user_name: str = ""
    status: str = REQUEST_PENDING
    requested_date: str = ""
    reviewed_by: Optional[str] = None
    reviewed_by_name: Optional[str] = None
    reviewed_at: Optional[str] = None
    rejection_reason: Optional[str] = None
    scheduled_payment_date: Optional[str] = None
    payment_status: Optional[str] = None
    paid_amount: Optional[float] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "FundRequest":
        values = _known(cls, data)
        paid = data.get("paid_amount")
        values.update(
            id=str(data.get("id", "")),
            user=str(data.get("user", "")),
            amount=_to_float(data.get("amount")),
            status=(data.get("status") or REQUEST_PENDING).upper(),
            payment_status=(data.get("payment_status") or "").upper() or None,
            paid_amount=_to_float(paid) if paid not in (None, "") else None,
            reviewed_by=_to_str(data.get("reviewed_by")),
        )
        return cls(**values)


@dataclass
class Notification:
    id: str
    title: str
    message: str = ""
    user: Optional[str] = None
    notification_type: str = "INFO"
    is_read: bool = False
    created_at: str = ""
    priority: str = "LOW"
    related_object_id: Optional[int] = None
    related_object_type: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Notification":
        values = _known(cls, data)
        values.update(
            id=str(data.get("id", "")),
            title=data.get("title", ""),
            user=_to_str(data.get("user")),
            notification_type=(data.get("notification_type") or "INFO").upper(),
            priority=(data.get("priority") or "LOW").upper(),
            is_read=bool(data.get("is_read", False)),
        )
        return cls(**values)


@dataclass
class WalletTransaction:
    id: str
    amount: float
    user: Optional[str] = None
    user_name: str = ""
    payment_method: str = ""
    transaction_id: str = ""
    transaction_type: str = WALLET_DEPOSIT
    status: str = "PENDING"
    notes: str = ""
    date: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "WalletTransaction":
        values = _known(cls, data)
        values.update(
            id=str(data.get("id", "")),
            amount=_to_float(data.get("amount")),
            user=_to_str(data.get("user")),
            status=(data.get("status") or "PENDING").upper(),
            notes=data.get("notes") or "",
            date=data.get("date") or data.get("created_at") or "",
        )
        return cls(**values)

    @property
    def payment_method_label(self) -> str:
        return self.payment_method.replace("_", " ")
