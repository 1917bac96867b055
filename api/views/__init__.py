from .health import health
from .auth import signup, login
from .calls import call_logs
from .users import contacts

__all__ = [
    "health",
    "signup",
    "login",
    "call_logs",
    "contacts",
]
