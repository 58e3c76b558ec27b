"""Failures raised by the task rules and the record stores.

Each error carries only its fixed, user-facing message. The interactive
boundary prints it and asks for the same input again.
"""


class AppError(Exception):
    """Base class for every recoverable taskapp failure"""

    message = "operation failed"

    def __init__(self, message=None):
        super().__init__(message or self.message)

    @property
    def text(self) -> str:
        return str(self)


class ValidationError(AppError):
    """A referenced entity is missing (or a code is already taken) on create"""

    message = "enter an existing user code"


class NotFoundError(AppError):
    message = "enter an existing task code"


class InvalidTransitionError(AppError):
    message = "status may only be changed to exactly one step ahead of the previous status"


class InvalidStateError(AppError):
    message = "select a task whose status is done"


class AuthError(AppError):
    message = "enter an already-registered email and password"


class StoreError(AppError):
    """A store file exists but cannot be parsed"""

    message = "record store is unreadable"
