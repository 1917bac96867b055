"""
Firebase service for Django - Firestore integration for accounts and call logs.

Firestore Collections:
- users/{uid}: username, email, password hash, profilePicture, contacts
- userEmails/{sha256(email)}: uniqueness index, {userId}
- callLogs/{logId}: caller, receiver, timestamp, status
"""
import hashlib
import json
import logging
import os
from typing import Optional, Dict, Any, Iterable, List

from django.utils import timezone

from .constants import DEFAULT_CALL_STATUS
from .exceptions import DuplicateEmailError, StoreUnavailableError
from .utils import user_summary

logger = logging.getLogger("api")

# Firebase Admin initialization
_firebase_app = None
_firestore_client = None
_firebase_init_attempted = False


def get_firebase_app():
    """Get or initialize Firebase Admin app"""
    global _firebase_app, _firebase_init_attempted

    if _firebase_app is not None:
        return _firebase_app

    if _firebase_init_attempted:
        # Already tried and failed
        return None

    _firebase_init_attempted = True

    import firebase_admin
    from firebase_admin import credentials

    use_emulator = os.environ.get("FIREBASE_USE_EMULATOR", "false").lower() == "true"
    project_id = os.environ.get("FIREBASE_PROJECT_ID")

    logger.info(f"Firebase init: use_emulator={use_emulator}, project_id={project_id}")

    if use_emulator:
        # FIRESTORE_EMULATOR_HOST must be set before the client is created
        os.environ["FIRESTORE_EMULATOR_HOST"] = os.environ.get("FIRESTORE_EMULATOR_HOST", "localhost:8080")
        options = {"projectId": project_id or "demo-peercall"}
        try:
            _firebase_app = firebase_admin.initialize_app(credential=None, options=options)
            logger.info(f"Firebase Admin initialized with EMULATOR ({os.environ['FIRESTORE_EMULATOR_HOST']})")
        except ValueError:
            # Already initialized
            _firebase_app = firebase_admin.get_app()
        return _firebase_app

    service_account_json = os.environ.get("FIREBASE_SERVICE_ACCOUNT")
    service_account_path = os.environ.get("FIREBASE_SERVICE_ACCOUNT_PATH")

    cred = None
    if service_account_json:
        try:
            cred = credentials.Certificate(json.loads(service_account_json))
            logger.info("Using FIREBASE_SERVICE_ACCOUNT env var")
        except json.JSONDecodeError as e:
            logger.error(f"Invalid FIREBASE_SERVICE_ACCOUNT JSON: {e}")
    elif service_account_path and os.path.exists(service_account_path):
        cred = credentials.Certificate(service_account_path)
        logger.info(f"Using service account from {service_account_path}")

    if cred is None:
        logger.warning("Firebase credentials not found - Firestore operations will fail")
        return None

    try:
        _firebase_app = firebase_admin.initialize_app(cred)
        logger.info("Firebase Admin initialized (production)")
    except ValueError:
        _firebase_app = firebase_admin.get_app()
    return _firebase_app


def get_firestore():
    """Get Firestore client"""
    global _firestore_client

    if _firestore_client is not None:
        return _firestore_client

    app = get_firebase_app()
    if app is None:
        return None

    from firebase_admin import firestore
    _firestore_client = firestore.client(app)
    return _firestore_client


def email_key(email: str) -> str:
    """Document id of the uniqueness index entry for an (already normalized) email."""
    return hashlib.sha256(email.encode("utf-8")).hexdigest()


def _with_id(doc) -> Dict[str, Any]:
    data = doc.to_dict() or {}
    data["id"] = doc.id
    return data


class FirestoreService:
    """Service class for Firestore operations"""

    # Collection names
    USERS_COLLECTION = "users"
    USER_EMAILS_COLLECTION = "userEmails"
    CALL_LOGS_COLLECTION = "callLogs"

    def __init__(self, db=None):
        self._db = db

    @property
    def db(self):
        """Lazy initialization of Firestore client"""
        if self._db is None:
            self._db = get_firestore()
        return self._db

    def is_available(self) -> bool:
        """Check if Firestore is available"""
        return self.db is not None

    def _require_db(self):
        db = self.db
        if db is None:
            raise StoreUnavailableError()
        return db

    # =========================================================================
    # User Operations
    # =========================================================================

    def create_user(
        self,
        username: str,
        email: str,
        password_hash: str,
        profile_picture: str = "",
    ) -> Dict[str, Any]:
        """
        Create a user, failing with DuplicateEmailError if the email is taken.

        The userEmails index entry and the user document are written in one
        transaction, so two concurrent signups with the same email cannot both
        succeed.
        """
        db = self._require_db()
        from firebase_admin import firestore as fb_firestore

        user_ref = db.collection(self.USERS_COLLECTION).document()
        email_ref = db.collection(self.USER_EMAILS_COLLECTION).document(email_key(email))
        now = timezone.now()
        user_data = {
            "username": username,
            "email": email,
            "password": password_hash,
            "profilePicture": profile_picture or "",
            "contacts": [],
            "createdAt": now,
        }

        @fb_firestore.transactional
        def _txn(transaction):
            self._write_new_user(transaction, email_ref, user_ref, user_data)

        try:
            _txn(db.transaction())
        except DuplicateEmailError:
            logger.warning(f"Signup rejected, email already registered: {email}")
            raise
        except Exception as e:
            logger.error(f"Error creating user {email}: {e}")
            raise

        logger.info(f"Created user: {user_ref.id}")
        return dict(user_data, id=user_ref.id)

    @staticmethod
    def _write_new_user(transaction, email_ref, user_ref, user_data):
        snapshot = email_ref.get(transaction=transaction)
        if snapshot.exists:
            raise DuplicateEmailError(user_data["email"])
        transaction.create(email_ref, {"userId": user_ref.id, "createdAt": user_data["createdAt"]})
        transaction.set(user_ref, user_data)

    def find_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        db = self._require_db()
        try:
            query = db.collection(self.USERS_COLLECTION).where("email", "==", email).limit(1)
            for doc in query.stream():
                return _with_id(doc)
            return None
        except Exception as e:
            logger.error(f"Error looking up user by email {email}: {e}")
            raise

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        db = self._require_db()
        try:
            doc = db.collection(self.USERS_COLLECTION).document(user_id).get()
            return _with_id(doc) if doc.exists else None
        except Exception as e:
            logger.error(f"Error getting user {user_id}: {e}")
            raise

    def get_users(self, user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """Fetch several users at once; missing ids are absent from the result."""
        db = self._require_db()
        ids = sorted({uid for uid in user_ids if isinstance(uid, str) and uid})
        if not ids:
            return {}
        try:
            collection = db.collection(self.USERS_COLLECTION)
            docs = db.get_all([collection.document(uid) for uid in ids])
            return {doc.id: _with_id(doc) for doc in docs if doc.exists}
        except Exception as e:
            logger.error(f"Error getting users {ids}: {e}")
            raise

    def add_contact(self, user_id: str, contact_id: str) -> List[str]:
        """Add contact_id to the user's contact set and return the updated set."""
        db = self._require_db()
        from firebase_admin import firestore as fb_firestore

        try:
            doc_ref = db.collection(self.USERS_COLLECTION).document(user_id)
            doc_ref.update({"contacts": fb_firestore.ArrayUnion([contact_id])})
            data = doc_ref.get().to_dict() or {}
            return list(data.get("contacts") or [])
        except Exception as e:
            logger.error(f"Error adding contact {contact_id} to {user_id}: {e}")
            raise

    def list_contacts(self, user: Dict[str, Any]) -> List[Dict[str, Any]]:
        contacts = self.get_users(user.get("contacts") or [])
        return [user_summary(contacts[cid]) for cid in user.get("contacts") or [] if cid in contacts]

    # =========================================================================
    # Call Log Operations
    # =========================================================================

    def create_call_log(
        self,
        caller_id: str,
        receiver_id: str,
        status: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Append a call log record. Records are write-once.

        Document structure at callLogs/{logId}:
        {
            "caller": "caller_user_id",
            "receiver": "receiver_user_id",
            "timestamp": Timestamp,
            "status": "ongoing"
        }
        """
        db = self._require_db()
        try:
            log_data = {
                "caller": caller_id,
                "receiver": receiver_id,
                "timestamp": timezone.now(),
                "status": status or DEFAULT_CALL_STATUS,
            }
            doc_ref = db.collection(self.CALL_LOGS_COLLECTION).document()
            doc_ref.set(log_data)
            logger.info(f"Created call log: {doc_ref.id}")
            return dict(log_data, id=doc_ref.id)
        except Exception as e:
            logger.error(f"Error creating call log: {e}")
            raise

    def list_call_logs(self) -> List[Dict[str, Any]]:
        """All call logs, oldest first, with caller/receiver resolved to user summaries."""
        db = self._require_db()
        try:
            logs = [_with_id(doc) for doc in db.collection(self.CALL_LOGS_COLLECTION).order_by("timestamp").stream()]
        except Exception as e:
            logger.error(f"Error fetching call logs: {e}")
            raise

        users = self.get_users(
            [log.get("caller") for log in logs] + [log.get("receiver") for log in logs]
        )
        for log in logs:
            for role in ("caller", "receiver"):
                uid = log.get(role)
                log[role] = user_summary(users.get(uid)) if isinstance(uid, str) else None
        return logs


# Singleton instance
firestore_service = FirestoreService()
