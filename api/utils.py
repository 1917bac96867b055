import time
from datetime import datetime

from django.utils import timezone
from django.utils.text import get_valid_filename


def normalize_datetime(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        if timezone.is_naive(value):
            return timezone.make_aware(value, timezone.get_current_timezone())
        return timezone.localtime(value)
    if hasattr(value, "timestamp"):
        return datetime.fromtimestamp(value.timestamp(), tz=timezone.get_current_timezone())
    return None


def format_timestamp(ts):
    if ts is None:
        return None
    normalized = normalize_datetime(ts)
    if normalized is not None:
        return normalized.isoformat()
    return str(ts)


def normalize_email(email) -> str:
    if not isinstance(email, str):
        return ""
    return email.strip().lower()


def upload_filename(original_name: str) -> str:
    """Millisecond timestamp prefix keeps uploads with the same name apart."""
    return f"{int(time.time() * 1000)}-{get_valid_filename(original_name)}"


def public_user(user: dict) -> dict:
    """User record as returned to clients, without the credential hash."""
    return {
        "id": user.get("id"),
        "username": user.get("username"),
        "email": user.get("email"),
        "profilePicture": user.get("profilePicture") or "",
        "contacts": list(user.get("contacts") or []),
        "createdAt": format_timestamp(user.get("createdAt")),
    }


def user_summary(user):
    if user is None:
        return None
    return {
        "id": user.get("id"),
        "username": user.get("username"),
        "profilePicture": user.get("profilePicture") or "",
    }
