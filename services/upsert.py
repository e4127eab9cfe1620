"""
Existence-gated upsert coordinator.

Every write endpoint goes through UpsertCoordinator.upsert(), which takes
exactly one write action per call:

    procedure strategy (default)
        1. SELECT rows matching every natural-key field
        2. rows found   -> update procedure (or the combined procedure)
           no rows      -> insert procedure
        3. commit both statements together; roll back on failure

    atomic strategy
        One INSERT ... ON DUPLICATE KEY UPDATE (MySQL) or
        INSERT ... ON CONFLICT DO UPDATE (PostgreSQL, SQLite) against the
        entity table's natural-key unique index. The store decides the branch,
        so concurrent writers cannot create duplicates.

The procedure strategy leaves a window between the SELECT and the write in
which a concurrent request for the same key can insert; deployments that
need concurrent writers on one key must run with UPSERT_STRATEGY=atomic.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence
from datetime import datetime
from sqlalchemy import and_, column, literal_column, select, table
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from core.config import settings
from core.exceptions import BackendError, QueryError, ValidationError
from models.base import UpsertAction
from services.entities import EntitySpec
from store.gateway import StoreGateway
import logging

logger = logging.getLogger(__name__)


class NaturalKey:
    """Ordered natural-key field/value pairs for one record"""

    def __init__(self, fields: Sequence[str], values: Mapping[str, Any]):
        self.fields = tuple(fields)
        self.values = {f: values[f] for f in self.fields}

    @classmethod
    def from_payload(cls, fields: Sequence[str], payload: Mapping[str, Any]) -> "NaturalKey":
        missing = [f for f in fields if payload.get(f) in (None, "")]
        if missing:
            raise ValidationError(
                f"Missing required key field(s): {', '.join(missing)}",
                context={"fields": missing}
            )
        return cls(fields, payload)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.values)

    def __eq__(self, other):
        return isinstance(other, NaturalKey) and self.fields == other.fields and self.values == other.values

    def __hash__(self):
        return hash(tuple((f, str(self.values[f])) for f in self.fields))

    def __str__(self):
        return ", ".join(f"{f}={self.values[f]}" for f in self.fields)

    def __repr__(self):
        return f"NaturalKey({self})"


class UpsertOutcome:
    """Which branch ran and the rows its write returned"""

    def __init__(self, action: UpsertAction, rows: Optional[List[Any]] = None):
        self.action = action
        self.rows = rows or []

    @property
    def created(self) -> bool:
        return self.action == UpsertAction.CREATED

    def __repr__(self):
        return f"UpsertOutcome({self.action.value}, rows={len(self.rows)})"


class UpsertCoordinator:
    """
    Decide insert vs update for one record and run exactly that write.
    """

    def __init__(self, gateway: StoreGateway, strategy: Optional[str] = None):
        self.gateway = gateway
        self.strategy = strategy or settings.UPSERT_STRATEGY

    async def upsert(self, entity: EntitySpec, payload: Mapping[str, Any]) -> UpsertOutcome:
        """
        Upsert one record.

        Raises:
            ValidationError: a natural-key field is missing
            BackendError: the lookup or the write failed (nothing is committed)
        """
        key = NaturalKey.from_payload(entity.key_fields, payload)

        try:
            if self.strategy == "atomic":
                outcome = await self._atomic_upsert(entity, key, payload)
            else:
                outcome = await self._gated_upsert(entity, key, payload)
            await self.gateway.commit()
        except BackendError as e:
            await self.gateway.rollback()
            e.context.setdefault("entity", entity.name)
            e.context.setdefault("natural_key", str(key))
            logger.error(f"Upsert of {entity.name} [{key}] failed: {e.message}")
            raise

        logger.info(f"Upsert of {entity.name} [{key}]: {outcome.action.value}")
        return outcome

    async def find_existing(self, entity: EntitySpec, key: NaturalKey) -> List[Dict[str, Any]]:
        """Rows whose natural key equals `key` on every field"""
        tbl = table(
            entity.table_name,
            *[column(f) for f in key.fields],
            schema=self.gateway.schema,
        )
        statement = (
            select(literal_column("*"))
            .select_from(tbl)
            .where(and_(*[tbl.c[f] == key.values[f] for f in key.fields]))
        )
        row_set = await self.gateway.fetch(
            statement,
            operation=f"{entity.name}.find_existing",
            context={"natural_key": str(key)},
        )
        return row_set.rows

    async def _gated_upsert(self, entity: EntitySpec, key: NaturalKey, payload: Mapping[str, Any]) -> UpsertOutcome:
        existing = await self.find_existing(entity, key)

        if existing:
            action = UpsertAction.UPDATED
            procedure = entity.insert_procedure if entity.combined_write else entity.update_procedure
        else:
            action = UpsertAction.CREATED
            procedure = entity.insert_procedure

        logger.debug(
            f"{entity.name} [{key}]: {len(existing)} existing row(s), calling {procedure.name}"
        )

        row_set = await self.gateway.call(
            procedure,
            procedure.bind(payload),
            context={"natural_key": str(key)},
        )
        return UpsertOutcome(action, row_set.rows)

    async def _atomic_upsert(self, entity: EntitySpec, key: NaturalKey, payload: Mapping[str, Any]) -> UpsertOutcome:
        model = entity.model
        columns = model.__table__.columns
        values = {
            p: payload.get(p)
            for p in entity.insert_procedure.params
            if p in columns
        }
        update_fields = [f for f in values if f not in key.fields]
        now = datetime.utcnow()
        # Both audit columns get the same instant so an insert is recognisable
        row_values = {**values, "created_at": now, "updated_at": now}
        translate = {None: self.gateway.schema} if self.gateway.schema else None
        dialect = self.gateway.dialect_name
        operation = f"{entity.name}.atomic_upsert"

        if dialect in ("mysql", "mariadb"):
            stmt = mysql_insert(model).values(**row_values)
            stmt = stmt.on_duplicate_key_update(
                {**{f: stmt.inserted[f] for f in update_fields}, "updated_at": now}
            )
        elif dialect in ("postgresql", "sqlite"):
            dialect_insert = pg_insert if dialect == "postgresql" else sqlite_insert
            stmt = dialect_insert(model).values(**row_values)
            stmt = stmt.on_conflict_do_update(
                index_elements=list(key.fields),
                set_={**{f: stmt.excluded[f] for f in update_fields}, "updated_at": now},
            )
            if dialect == "postgresql":
                inserted_expr = literal_column("(xmax = 0)")
            else:
                inserted_expr = model.__table__.c.created_at == model.__table__.c.updated_at
            stmt = stmt.returning(inserted_expr.label("inserted"))
        else:
            raise QueryError(
                f"Atomic upsert is not supported on {dialect or 'this'} database",
                context={"operation": operation}
            )

        if translate:
            stmt = stmt.execution_options(schema_translate_map=translate)
        result = await self.gateway.execute(stmt, operation=operation, context={"natural_key": str(key)})

        if dialect in ("mysql", "mariadb"):
            # affected rows: 1 = inserted, 2 = updated; an unchanged row leaves lastrowid at 0
            inserted = result.rowcount == 1 and bool(result.lastrowid)
        else:
            inserted = bool(result.scalar())

        action = UpsertAction.CREATED if inserted else UpsertAction.UPDATED
        return UpsertOutcome(action, [values])
