import math
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple, Union

Number = Union[int, float, str, None]


def _as_float(value: Number) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def format_inr(amount: Number, decimals: int = 0) -> str:
    """Format an amount with Indian digit grouping, e.g. 120000 -> ₹1,20,000"""
    value = _as_float(amount)
    sign = "-" if value < 0 else ""
    value = abs(value)

    formatted = f"{value:.{decimals}f}"
    integer_part, _, fraction = formatted.partition(".")

    # Last three digits, then groups of two
    if len(integer_part) > 3:
        head, tail = integer_part[:-3], integer_part[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        integer_part = ",".join(groups + [tail])

    result = f"₹{sign}{integer_part}"
    if fraction:
        result += f".{fraction}"
    return result


def format_time_12h(time_str: Optional[str]) -> str:
    """Format HH:MM[:SS] as 2:30 PM"""
    if not time_str:
        return "--"
    parts = str(time_str).split(":")
    if len(parts) < 2:
        return time_str
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return time_str

    suffix = "PM" if hours >= 12 else "AM"
    hour_12 = hours % 12 or 12
    return f"{hour_12}:{minutes:02d} {suffix}"


def normalize_time(time_str: Optional[str]) -> Optional[str]:
    """Pad a time string out to HH:MM:SS as the backend expects."""
    if not time_str or not isinstance(time_str, str):
        return time_str
    parts = time_str.split(":")
    if len(parts) == 1:
        return f"{parts[0]}:00:00"
    if len(parts) == 2:
        return f"{time_str}:00"
    return time_str


def parse_datetime(value: Union[str, datetime, date, None]) -> Optional[datetime]:
    """Tolerant ISO-8601 parser; returns a naive UTC datetime or None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip().replace("Z", "+00:00")
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            try:
                parsed = datetime.strptime(text[:10], "%Y-%m-%d")
            except ValueError:
                return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_date(value: Union[str, datetime, date, None]) -> Optional[date]:
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def format_date(value: Union[str, datetime, date, None], fmt: str = "%d/%m/%Y") -> str:
    parsed = parse_date(value)
    return parsed.strftime(fmt) if parsed else "--"


def relative_time(value: Union[str, datetime, None], now: Optional[datetime] = None) -> str:
    """Just now / 3 hours ago / Yesterday / Mar 4 (+ year when not the current one)."""
    created = parse_datetime(value)
    if created is None:
        return ""
    now = now or datetime.now(timezone.utc).replace(tzinfo=None)

    diff_hours = math.floor((now - created).total_seconds() / 3600)
    if diff_hours < 1:
        return "Just now"
    if diff_hours < 24:
        return f"{diff_hours} hour{'s' if diff_hours > 1 else ''} ago"
    if diff_hours < 48:
        return "Yesterday"

    label = f"{created.strftime('%b')} {created.day}"
    if created.year != now.year:
        label += f", {created.year}"
    return label


def remaining_days(value: Union[str, date, None], today: Optional[datetime] = None) -> int:
    """Whole days until the given date, rounded up; negative once it has passed."""
    target = parse_datetime(value)
    if target is None:
        return 0
    today = today or datetime.now()
    return math.ceil((target - today).total_seconds() / 86400)


def days_from(start: date, days: int) -> date:
    return start + timedelta(days=days)


def split_full_name(name: str) -> Tuple[str, str]:
    """Split "Shakir Jamal Khan" into ("Shakir", "Jamal Khan")."""
    parts = (name or "").strip().split(" ")
    return parts[0], " ".join(parts[1:])


def progress_percent(paid: Number, target: Number) -> float:
    target_value = _as_float(target)
    if target_value <= 0:
        return 0.0
    return _as_float(paid) / target_value * 100


def sort_by_date_desc(items: list, attr: str) -> list:
    """Sort records newest first by a date attribute; undated records go last."""
    return sorted(
        items,
        key=lambda item: parse_datetime(getattr(item, attr, None)) or datetime.min,
        reverse=True,
    )
