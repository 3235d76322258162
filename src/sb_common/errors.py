"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User
  9xxx: System

The exception handler in src/main.py renders ``message`` as a plain-text
body with ``http_status``.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/User ---

class UserExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "User already exists", 400)


class UserNotFoundError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "User not found", 404)


class IncorrectPasswordError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Incorrect password", 401)


class NotLoggedInError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Not logged in", 401)


class SessionInvalidatedError(AppError):
    """The session names a user that no longer exists in the store."""

    def __init__(self) -> None:
        super().__init__(1005, "Session is no longer valid", 401)


# --- 9xxx: System ---

class StoreError(AppError):
    """Backing store failure: auth, network or malformed document.

    The client only ever sees the generic message; ``detail`` is for logs.
    """

    def __init__(self, detail: str) -> None:
        super().__init__(9003, "Internal server error", 500)
        self.detail = detail
