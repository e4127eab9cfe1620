"""
Pytest configuration and fixtures.

FakeSession stands in for an AsyncSession: it interprets the CALL text and
the Core SELECTs the gateway issues against an in-memory FakeStore, so the
real StoreGateway, services and routes run unchanged.
"""

import re
import pytest
import pytest_asyncio
from collections import defaultdict
from datetime import date
from typing import Any, Callable, Dict, List
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql.elements import TextClause
from models.base import Base
from services import entities
from services.hashing import hash_credential
from store import procedures
from store.gateway import StoreGateway


class FakeResult:
    def __init__(self, rows: List[Dict[str, Any]]):
        self._rows = rows
        self.returns_rows = True
        self.rowcount = len(rows)

    def mappings(self):
        return self

    def all(self):
        return list(self._rows)


class FakeStore:
    """In-memory tables plus stored-procedure handlers"""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self.procedures: Dict[str, Callable[[List[Any]], List[Dict[str, Any]]]] = {}
        self.calls: List[tuple] = []
        self.selects: List[tuple] = []
        self.fail_with: Exception = None

        for entity in (
            entities.DAILY_EXCAVATION,
            entities.GEOLOGICAL_SAMPLE,
            entities.PRODUCTION_DISPATCH,
            entities.EQUIPMENT_ENGAGEMENT,
            entities.FUEL_ISSUE,
            entities.KPI_DAILY_ACTUAL,
        ):
            self._register_entity(entity)

        self.procedures[procedures.ADMIN_USER_GET.name] = self._admin_user_get
        self.procedures[procedures.LOCATION_SHOW.name] = lambda args: [
            {"Loc_id": "L1", "Loc_name": "North Pit"},
            {"Loc_id": "L2", "Loc_name": "South Pit"},
        ]
        self.procedures[procedures.EQUIPMENT_SHOW.name] = lambda args: [
            {"Equipment_id": "EX-01", "Equipment_type": "Excavator", "Status": "working"},
        ]
        self.procedures[procedures.KPI_DAILY_ACTUAL_SHOW.name] = lambda args: [
            r for r in self.tables["kpi_daily_actual"] if str(r["userId"]) == str(args[0])
        ]

    # ------------------------------------------------------------------

    def _matches(self, row: Dict[str, Any], criteria: Dict[str, Any]) -> bool:
        return all(str(row.get(k)) == str(v) for k, v in criteria.items())

    def _register_entity(self, entity):
        table_rows = self.tables[entity.table_name]

        def insert(args):
            record = dict(zip(entity.insert_procedure.params, args))
            key = {f: record[f] for f in entity.key_fields}
            existing = [r for r in table_rows if self._matches(r, key)]
            if entity.combined_write and existing:
                existing[0].update(record)
                return [{"result": "updated"}]
            table_rows.append(record)
            return [{"result": "inserted", "id": len(table_rows)}]

        def update(args):
            record = dict(zip(entity.update_procedure.params, args))
            key = {f: record[f] for f in entity.key_fields}
            for row in table_rows:
                if self._matches(row, key):
                    row.update(record)
            return [{"result": "updated"}]

        self.procedures[entity.insert_procedure.name] = insert
        if entity.update_procedure is not None:
            self.procedures[entity.update_procedure.name] = update
        if entity.show_procedure is not None:
            self.procedures[entity.show_procedure.name] = lambda args: [dict(r) for r in table_rows]

    def _admin_user_get(self, args):
        userid, digest = args
        for user in self.tables["mines_users"]:
            # Exact match: the caller must pass the digest as stored
            if str(user["UserId"]) == str(userid) and user["password"] == digest:
                profile = self.tables["mines_user_profiles"]
                return [dict(p, password=user["password"]) for p in profile if str(p["UserId"]) == str(userid)]
        return []

    # ------------------------------------------------------------------

    def call(self, name: str, args: List[Any]) -> List[Dict[str, Any]]:
        self.calls.append((name, args))
        return self.procedures[name](args)

    def select(self, table_name: str, criteria: Dict[str, Any]) -> List[Dict[str, Any]]:
        self.selects.append((table_name, criteria))
        return [dict(r) for r in self.tables[table_name] if self._matches(r, criteria)]

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]


class FakeSession:
    """Just enough of AsyncSession for StoreGateway"""

    bind = None

    def __init__(self, store: FakeStore):
        self.store = store
        self.commits = 0
        self.rollbacks = 0

    async def execute(self, statement, params=None):
        if self.store.fail_with is not None:
            raise self.store.fail_with

        if isinstance(statement, TextClause):
            sql = statement.text
            if sql == "SELECT 1":
                return FakeResult([{"1": 1}])
            name = re.match(r"CALL (?:\w+\.)?(\w+)\(", sql).group(1)
            args = [params[f"p{i}"] for i in range(len(params or {}))]
            return FakeResult(self.store.call(name, args))

        table_name = statement.get_final_froms()[0].name
        criteria = {
            re.sub(r"_\d+$", "", k): v
            for k, v in statement.compile().params.items()
            if not k.startswith("param_")
        }
        return FakeResult(self.store.select(table_name, criteria))

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1


ADMIN_PASSWORD = "Quarry#2024"
INTRANET_PASSWORD = "intranet-pass"
ACCESS_PASSWORD = "access-pass"


@pytest.fixture
def store():
    """Store seeded with one identity per credential table"""
    fake = FakeStore()

    # Digests stored upper-case on purpose: comparison must ignore case
    fake.tables["mines_users"] = [
        {"UserId": "1001", "USER_NAME": "Mine Admin", "password": hash_credential(ADMIN_PASSWORD).upper()},
        {"UserId": "1002", "USER_NAME": "No Profile", "password": hash_credential(ADMIN_PASSWORD)},
    ]
    fake.tables["mines_user_profiles"] = [
        {"UserId": "1001", "USER_NAME": "Mine Admin", "ROLE": "admin", "JOIN_DATE": date(2020, 1, 6)},
    ]
    fake.tables["intranet_login"] = [
        {"EMP_CODE": "E77", "EMP_NAME": "Geologist", "USER_PWD": hash_credential(INTRANET_PASSWORD)},
    ]
    fake.tables["user_access"] = [
        {"USER_ID": "A9", "PASSWORD_HASH": hash_credential(ACCESS_PASSWORD), "PASSWORD": "legacy"},
    ]
    return fake


@pytest.fixture
def db_session(store):
    return FakeSession(store)


@pytest.fixture
def gateway(db_session):
    return StoreGateway(db_session, schema="balcorpdb", timeout=5)


@pytest.fixture
def client(gateway):
    """Create test client with the store gateway overridden"""
    from api.main import app
    from api.dependencies import get_gateway

    async def override_get_gateway():
        return gateway

    app.dependency_overrides[get_gateway] = override_get_gateway

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def excavation_payload():
    return {
        "Prod_date": "2024-03-05",
        "Shift": "A",
        "Loc_id": "L1",
        "Face_Desc": "North bench 3",
        "OB_QTY_Cum": "1200",
        "ORE_QTY": "450.5",
        "HG_QTY": "200",
        "MG_QTY": "150",
        "LG_QTY": "100.5",
        "userId": "1001",
    }


@pytest.fixture
def kpi_payload():
    return {
        "date": "2024-03-05",
        "plant_id": "P01",
        "func_id": "HR",
        "kpi_code": "ATTRITION",
        "uom": "%",
        "hr_target": "2.5",
        "actual_data": "1.8",
        "userId": "1001",
    }


@pytest_asyncio.fixture(scope="function")
async def sqlite_engine():
    """In-memory SQLite engine with every operational table created"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def sqlite_session(sqlite_engine):
    session_maker = async_sessionmaker(
        sqlite_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_maker() as session:
        yield session
