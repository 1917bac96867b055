import importlib
import itertools

import pytest
from django.utils import timezone

from api.constants import DEFAULT_CALL_STATUS
from api.exceptions import DuplicateEmailError
from api.utils import user_summary
from signaling import ConnectionRegistry, SignalingRelay


class InMemoryFirestoreService:
    """Stands in for FirestoreService in view tests."""

    def __init__(self):
        self.users = {}
        self.call_logs = []
        self._ids = itertools.count(1)
        self.fail_with = None

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def is_available(self):
        return True

    def create_user(self, username, email, password_hash, profile_picture=""):
        self._check()
        if any(user["email"] == email for user in self.users.values()):
            raise DuplicateEmailError(email)
        user_id = f"user{next(self._ids)}"
        self.users[user_id] = {
            "id": user_id,
            "username": username,
            "email": email,
            "password": password_hash,
            "profilePicture": profile_picture or "",
            "contacts": [],
            "createdAt": timezone.now(),
        }
        return dict(self.users[user_id])

    def find_user_by_email(self, email):
        self._check()
        for user in self.users.values():
            if user["email"] == email:
                return dict(user)
        return None

    def get_user(self, user_id):
        self._check()
        user = self.users.get(user_id)
        return dict(user) if user else None

    def get_users(self, user_ids):
        return {uid: dict(self.users[uid]) for uid in user_ids if uid in self.users}

    def add_contact(self, user_id, contact_id):
        self._check()
        contacts = self.users[user_id]["contacts"]
        if contact_id not in contacts:
            contacts.append(contact_id)
        return list(contacts)

    def list_contacts(self, user):
        contacts = self.get_users(user.get("contacts") or [])
        return [user_summary(contacts[cid]) for cid in user.get("contacts") or [] if cid in contacts]

    def create_call_log(self, caller_id, receiver_id, status=None):
        self._check()
        log = {
            "id": f"log{next(self._ids)}",
            "caller": caller_id,
            "receiver": receiver_id,
            "timestamp": timezone.now(),
            "status": status or DEFAULT_CALL_STATUS,
        }
        self.call_logs.append(log)
        return dict(log)

    def list_call_logs(self):
        self._check()
        users = self.get_users([log["caller"] for log in self.call_logs] + [log["receiver"] for log in self.call_logs])
        return [
            dict(log, caller=user_summary(users.get(log["caller"])), receiver=user_summary(users.get(log["receiver"])))
            for log in self.call_logs
        ]


class FakeTransport:
    def __init__(self):
        self.sent = []

    def send(self, sid, event, data):
        self.sent.append((sid, event, data))


@pytest.fixture(autouse=True)
def fast_password_hasher(settings):
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / "uploads"
    return settings.MEDIA_ROOT


@pytest.fixture
def store(monkeypatch):
    fake = InMemoryFirestoreService()
    for name in ("auth", "calls", "health", "users"):
        module = importlib.import_module(f"api.views.{name}")
        monkeypatch.setattr(module, "firestore_service", fake)
    return fake


@pytest.fixture
def registry():
    return ConnectionRegistry()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def relay(registry, transport):
    return SignalingRelay(registry, transport)
