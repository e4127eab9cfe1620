"""
Core utilities and configuration for the mines operations gateway.

Modules:
    config: Application configuration and environment variable management
    database: Engine lifecycle and session management
    exceptions: Exception hierarchy mapped onto HTTP status codes
    logging: Logging configuration

Usage:
    from core.config import settings
    from core.database import database
    from core.exceptions import BackendError, ValidationError
    from core.logging import setup_logging

Example:
    setup_logging()
    database.connect()

    async with database.session() as session:
        # Perform database operations
        pass

    await database.disconnect()
"""

__all__ = [
    "settings",
    "database",
    "setup_logging",
    # Exceptions
    "GatewayException",
    "ValidationError",
    "AuthError",
    "NotFoundError",
    "BackendError",
    "BackendUnavailableError",
    "QueryError",
    "ProcedureArityError",
]
