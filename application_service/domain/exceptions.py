# application_service/domain/exceptions.py
"""Errors raised by entities and use cases.

``message`` is the Portuguese text shown to end users, ``error`` is a stable
English code that clients can match on.
"""


class DomainError(Exception):
    error = "Domain error"

    def __init__(self, message: str, error: str | None = None):
        super().__init__(message)
        self.message = message
        if error is not None:
            self.error = error

    def to_dict(self) -> dict:
        return {"message": self.message, "error": self.error}


class NotFound(DomainError):
    error = "Not found"


class EmailConflict(DomainError):
    error = "Email already in use"


class InvalidArgument(DomainError):
    error = "Invalid argument"


class Forbidden(DomainError):
    error = "Forbidden"


class DeletionFailed(DomainError):
    error = "Deletion failed"


class Unauthorized(DomainError):
    error = "Unauthorized"

    def __init__(self, message: str, error: str | None = None, hint: str | None = None):
        super().__init__(message, error)
        self.hint = hint

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.hint:
            data["hint"] = self.hint
        return data


class ValidationFailed(DomainError):
    error = "Validation failed"

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(self._summary(len(errors)))

    @staticmethod
    def _summary(count: int) -> str:
        return f"{count} erro ocorreu" if count == 1 else f"{count} erros ocorreram"

    def to_dict(self) -> dict:
        return {"message": self.message, "errors": self.errors}


class RateLimited(DomainError):
    error = "Rate limit exceeded"

    def __init__(
        self,
        message: str,
        error: str | None = None,
        retry_after: int = 60,
        docs_url: str | None = None,
    ):
        super().__init__(message, error)
        self.retry_after = retry_after
        self.docs_url = docs_url

    def to_dict(self) -> dict:
        data = {
            "message": self.message,
            "error": self.error,
            "retryAfter": self.retry_after,
        }
        if self.docs_url:
            data["links"] = [
                {"rel": "documentation", "href": self.docs_url, "method": "GET"}
            ]
        return data
