"""Typed service errors.

Each error is an ``HTTPException`` so services can raise it directly and FastAPI
renders it as ``{"detail": ...}`` with the matching status code.
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str = "Conflict"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class InvalidArgumentError(HTTPException):
    def __init__(self, detail: str = "Invalid argument"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class DependencyFailureError(HTTPException):
    """An external collaborator (mailer, store) could not serve the request."""

    def __init__(self, detail: str = "Dependency unavailable"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
