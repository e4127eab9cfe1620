"""
Custom exceptions for the mines operations gateway with structured error context.

Each exception carries the HTTP status the API layer maps it to, plus
context information for logging. Context is logged, never returned to
the caller.

Exception Hierarchy:
    GatewayException (base)
    ├── ValidationError          400
    ├── AuthError                401
    ├── NotFoundError            404
    └── BackendError             500
        ├── BackendUnavailableError   503 (pool exhausted, connection lost, timeout)
        ├── QueryError                500
        └── ProcedureArityError       500
"""

from typing import Optional, Dict, Any
from datetime import datetime


class GatewayException(Exception):
    """
    Base exception for all gateway errors.

    Attributes:
        message: Human-readable error message, safe to return to the caller
        context: Additional context information (operation, natural key, etc.)
        original_exception: The original exception that was caught (if any)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.utcnow()

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": type(self.original_exception).__name__ if self.original_exception else None
        }


# ============================================================================
# Request Errors
# ============================================================================

class ValidationError(GatewayException):
    """
    Raised when a required field is missing or malformed.

    Context should include:
        - fields: Names of the offending fields
        - entity: Entity being written (if applicable)
    """
    status_code = 400


class AuthError(GatewayException):
    """
    Raised on credential mismatch or unknown identity at login.

    Context should include:
        - realm: Login realm that rejected the credential
    """
    status_code = 401


class NotFoundError(GatewayException):
    """Raised when the credential is valid but no profile row exists."""
    status_code = 404


# ============================================================================
# Backend Errors
# ============================================================================

class BackendError(GatewayException):
    """
    Base exception for data store failures.

    Context should include:
        - operation: Procedure name or lookup being executed
        - natural_key: Key of the record being written (if applicable)
    """
    status_code = 500


class BackendUnavailableError(BackendError):
    """Store unreachable, pool exhausted or call timed out."""
    status_code = 503


class QueryError(BackendError):
    """Statement rejected by the store (malformed query, procedure failure)."""
    pass


class ProcedureArityError(BackendError):
    """
    Raised before execution when the number of positional parameters
    differs from the procedure's declared arity.

    Context should include:
        - operation: Procedure name
        - expected: Declared arity
        - received: Number of parameters supplied
    """
    pass
