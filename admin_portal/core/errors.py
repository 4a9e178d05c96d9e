# admin_portal/core/errors.py
from fastapi import HTTPException, status


class Unauthorized(HTTPException):
    """Bad credentials, expired/invalid code, short password, bad session token."""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class Forbidden(HTTPException):
    """Policy deny: role, group or ownership mismatch."""

    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class Conflict(HTTPException):
    def __init__(self, detail: str = "Conflict"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class BadRequest(HTTPException):
    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class DeliveryFailed(HTTPException):
    """
    The notifier could not deliver a message.

    Raised after the related rows are committed; the caller's data is kept.
    """

    def __init__(self, detail: str = "Message delivery failed"):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)
