"""
Repository-level exceptions.

The repository layer exposes a closed taxonomy to its callers:

| Exception                 | Meaning                                                        | HTTP |
| ------------------------- | -------------------------------------------------------------- | ---- |
| `InvalidIdentifierError`  | caller-supplied identifier is malformed, or (answer creation)  | 400  |
|                           | names a question that does not exist                           |      |
| `StorageError`            | anything else the storage layer raised (connectivity, timeout, | 500  |
|                           | unexpected constraint, row decoding)                           |      |

Both derive from `RepositoryError`, so handlers can catch the whole family at once.
Raw driver exceptions never cross the repository boundary; they are chained as `__cause__`
for logs and tracebacks only.
"""


# canonical repository-level exception

class RepositoryError(Exception):
    """
    Base exception for repository errors.

    - message: human-friendly message (safe to show to clients)
    - error_code: canonical short code (e.g., 'invalid_identifier') used by clients
    """

    # Map canonical error_code -> default HTTP status.
    ERROR_CODE_TO_STATUS = {
        "invalid_identifier": 400,
        "storage_error": 500,
    }

    def __init__(self, message: str, *, error_code: str | None = None):
        super().__init__(message)
        self.message = message  # user-friendly message
        self.error_code = error_code

    def __str__(self) -> str:
        if self.error_code:
            return f"{self.message} (code: {self.error_code})"
        return self.message

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses.
        Standard shape:
            {
                "detail": "A human-friendly message",
                "code": "invalid_identifier",
            }
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        return payload

    def http_status(self) -> int:
        """
        HTTP status for this error, looked up by error_code; 500 when unknown.
        """
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)
        return 500


class InvalidIdentifierError(RepositoryError):
    """Malformed identifier, or a well-formed one naming a parent row that does not exist."""

    def __init__(self, message: str):
        super().__init__(message, error_code="invalid_identifier")


class StorageError(RepositoryError):
    """Opaque storage failure. The underlying exception is available as `__cause__`."""

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message, error_code="storage_error")


__all__ = [
    "RepositoryError",
    "InvalidIdentifierError",
    "StorageError",
]
