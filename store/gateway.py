"""
Store gateway: the only component that talks to the database.

Responsibilities:
- Call stored procedures with a checked positional arity
- Run read-only lookups built with SQLAlchemy Core
- Enforce an explicit timeout on every call
- Translate driver failures into BackendError subclasses
- Resolve every result into a RowSet
"""

import asyncio
from typing import Any, Dict, Optional, Sequence
from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, DisconnectionError, InterfaceError, OperationalError,
    SQLAlchemyError, TimeoutError as PoolTimeoutError
)
from sqlalchemy.ext.asyncio import AsyncSession
from core.config import settings
from core.exceptions import (
    BackendError, BackendUnavailableError, ProcedureArityError, QueryError
)
from store.procedures import StoredProcedure
from store.rowsets import RowSet, SingleRowSet, resolve_row_set
import logging

logger = logging.getLogger(__name__)


class StoreGateway:
    """
    Thin wrapper around one AsyncSession.

    A gateway lives for one request; the session it wraps is checked out
    from the pool by the caller and returned when the request ends.
    """

    def __init__(
        self,
        db_session: AsyncSession,
        schema: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.db = db_session
        self.schema = schema if schema is not None else settings.DB_SCHEMA
        self.timeout = timeout if timeout is not None else settings.STORE_CALL_TIMEOUT_SECONDS

    @property
    def dialect_name(self) -> str:
        bind = self.db.bind
        return bind.dialect.name if bind is not None else ""

    async def call(
        self,
        procedure: StoredProcedure,
        params: Sequence[Any] = (),
        context: Optional[Dict[str, Any]] = None
    ) -> RowSet:
        """
        Call a stored procedure with positional parameters.

        Raises:
            ProcedureArityError: parameter count differs from the declared arity
            BackendUnavailableError: pool exhausted, connection lost, timed out
            QueryError: the store rejected the call
        """
        params = list(params)
        if len(params) != procedure.arity:
            raise ProcedureArityError(
                f"Procedure {procedure.name} called with wrong number of parameters",
                context={
                    "operation": procedure.name,
                    "expected": procedure.arity,
                    "received": len(params),
                    **(context or {}),
                }
            )

        placeholders = ", ".join(f":p{i}" for i in range(len(params)))
        statement = text(f"CALL {procedure.qualified_name(self.schema)}({placeholders})")
        binds = {f"p{i}": value for i, value in enumerate(params)}

        result = await self._execute(statement, binds, procedure.name, context)
        return self._to_row_set(result)

    async def fetch(
        self,
        statement,
        operation: str,
        params: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> RowSet:
        """Run a read-only statement and return its rows"""
        result = await self._execute(statement, params, operation, context)
        return self._to_row_set(result)

    async def execute(
        self,
        statement,
        operation: str,
        context: Optional[Dict[str, Any]] = None
    ):
        """Run a write statement and return the raw driver result"""
        return await self._execute(statement, None, operation, context)

    async def commit(self):
        try:
            await asyncio.wait_for(self.db.commit(), timeout=self.timeout)
        except (asyncio.TimeoutError, SQLAlchemyError) as e:
            error = self._translate(e, "COMMIT", None)
            logger.error(str(error))
            raise error from e

    async def rollback(self):
        try:
            await self.db.rollback()
        except SQLAlchemyError as e:
            logger.warning(f"Rollback failed: {type(e).__name__}")

    async def ping(self) -> bool:
        """Return True when the store answers SELECT 1"""
        await self._execute(text("SELECT 1"), None, "PING", None)
        return True

    # ------------------------------------------------------------------

    async def _execute(self, statement, params, operation: str, context: Optional[Dict[str, Any]]):
        try:
            if params:
                coro = self.db.execute(statement, params)
            else:
                coro = self.db.execute(statement)
            return await asyncio.wait_for(coro, timeout=self.timeout)
        except (asyncio.TimeoutError, SQLAlchemyError) as e:
            error = self._translate(e, operation, context)
            logger.error(str(error))
            raise error from e

    def _translate(self, exc: Exception, operation: str, context: Optional[Dict[str, Any]]) -> BackendError:
        error_context = {"operation": operation, **(context or {})}

        if isinstance(exc, asyncio.TimeoutError):
            return BackendUnavailableError(
                f"Data store did not answer within {self.timeout}s",
                context=error_context,
                original_exception=exc
            )
        if isinstance(exc, PoolTimeoutError):
            return BackendUnavailableError(
                "Connection pool exhausted",
                context=error_context,
                original_exception=exc
            )
        if isinstance(exc, (OperationalError, InterfaceError, DisconnectionError)) or (
            isinstance(exc, DBAPIError) and exc.connection_invalidated
        ):
            return BackendUnavailableError(
                "Data store unavailable",
                context=error_context,
                original_exception=exc
            )
        return QueryError(
            f"Data store rejected {operation}",
            context=error_context,
            original_exception=exc
        )

    @staticmethod
    def _to_row_set(result) -> RowSet:
        if result is None or not getattr(result, "returns_rows", False):
            return SingleRowSet([])
        return resolve_row_set(list(result.mappings().all()))
