"""
Credential lookup and verification.

One adapter serves every credential table; which table is read is decided
by the CredentialTable it is given, never by a per-table copy of the code.
"""

from typing import Any, Dict, Optional, Tuple
from sqlalchemy import column, literal_column, select, table
from store.gateway import StoreGateway
from services.hashing import hash_credential
import logging

logger = logging.getLogger(__name__)


class CredentialTable:
    """
    Where one identity space keeps its digests.

    Attributes:
        name: Table name
        identity_column: Column the identity is matched against
        digest_column: Column holding the stored hex digest
        digest_aliases: Every column name the digest may appear under in
            rows returned to callers; all of them are stripped from responses
        schema: Database schema, defaults to the gateway's schema
    """

    def __init__(
        self,
        name: str,
        identity_column: str,
        digest_column: str,
        digest_aliases: Tuple[str, ...] = (),
        schema: Optional[str] = None
    ):
        self.name = name
        self.identity_column = identity_column
        self.digest_column = digest_column
        self.digest_aliases = tuple(dict.fromkeys((digest_column,) + tuple(digest_aliases)))
        self.schema = schema

    def __repr__(self):
        return f"CredentialTable({self.name}.{self.identity_column})"


MINES_USERS = CredentialTable(
    "mines_users",
    identity_column="UserId",
    digest_column="password",
)

INTRANET_LOGIN = CredentialTable(
    "intranet_login",
    identity_column="EMP_CODE",
    digest_column="USER_PWD",
    digest_aliases=("pwd",),
)

USER_ACCESS = CredentialTable(
    "user_access",
    identity_column="USER_ID",
    digest_column="PASSWORD_HASH",
    digest_aliases=("PASSWORD",),
)


class CredentialStoreAdapter:
    """Fetches stored digests (and whole rows) from one credential table"""

    def __init__(self, gateway: StoreGateway, credential_table: CredentialTable):
        self.gateway = gateway
        self.credential_table = credential_table

    def _table(self):
        ct = self.credential_table
        return table(
            ct.name,
            column(ct.identity_column),
            column(ct.digest_column),
            schema=ct.schema or self.gateway.schema,
        )

    async def fetch_stored_digest(self, identity: Any) -> Optional[str]:
        """
        Return the stored digest for `identity`, or None when no row matches
        or the stored value is empty.
        """
        ct = self.credential_table
        tbl = self._table()
        statement = (
            select(tbl.c[ct.digest_column])
            .where(tbl.c[ct.identity_column] == identity)
            .limit(1)
        )
        row_set = await self.gateway.fetch(
            statement,
            operation=f"{ct.name}.fetch_digest",
            context={"table": ct.name},
        )
        row = row_set.first()
        if row is None:
            return None
        digest = row.get(ct.digest_column)
        if digest is None:
            return None
        digest = str(digest).strip()
        return digest or None

    async def fetch_row(self, identity: Any) -> Optional[Dict[str, Any]]:
        """Return the full credential row for `identity`, or None"""
        ct = self.credential_table
        tbl = self._table()
        statement = (
            select(literal_column("*"))
            .select_from(tbl)
            .where(tbl.c[ct.identity_column] == identity)
            .limit(1)
        )
        row_set = await self.gateway.fetch(
            statement,
            operation=f"{ct.name}.fetch_row",
            context={"table": ct.name},
        )
        row = row_set.first()
        return dict(row) if row is not None else None


def digests_match(supplied: Optional[str], stored: Optional[str]) -> bool:
    """Case-insensitive digest equality; anything missing never matches"""
    if not supplied or not stored:
        return False
    return supplied.lower() == stored.lower()


class CredentialVerifier:
    """
    verify(identity, plaintext) -> bool

    Fails closed on unknown identity. BackendError from the lookup is not
    caught, so callers can tell "wrong password" from "store down".
    """

    def __init__(self, adapter: CredentialStoreAdapter):
        self.adapter = adapter

    async def verify(self, identity: Any, plaintext: str) -> bool:
        return await self.matched_digest(identity, plaintext) is not None

    async def matched_digest(self, identity: Any, plaintext: str) -> Optional[str]:
        """The stored digest, exactly as stored, when `plaintext` matches it"""
        stored = await self.adapter.fetch_stored_digest(identity)
        if stored is None:
            logger.info(f"No stored credential in {self.adapter.credential_table.name}")
            return None
        return stored if digests_match(hash_credential(plaintext), stored) else None
