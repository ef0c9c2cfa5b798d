from typing import List, Optional

from fastapi import status


class ExamBankError(Exception):
    """Base for errors reported to the client as ``{message, success: false}``."""

    status_code = status.HTTP_400_BAD_REQUEST
    category = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ExamBankError):
    status_code = status.HTTP_404_NOT_FOUND
    category = "not_found"


class ValidationFailedError(ExamBankError):
    category = "validation_failed"

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class ReferentialViolationError(ExamBankError):
    category = "referential_violation"
