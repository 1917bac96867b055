class StoreError(Exception):
    """Base class for account and call log store failures"""


class StoreUnavailableError(StoreError):
    def __init__(self, message: str = "Firebase Firestore is not configured"):
        super().__init__(message)


class DuplicateEmailError(StoreError):
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"email already registered: {email}")


class InvalidTokenError(Exception):
    pass
