"""
Login realms.

Each login endpoint is bound to exactly one realm, and each realm to
exactly one credential table, so the three identity spaces never overlap.
"""

from typing import Any, Dict, Optional
from core.exceptions import AuthError, NotFoundError
from services.credentials import (
    INTRANET_LOGIN, MINES_USERS, USER_ACCESS,
    CredentialStoreAdapter, CredentialTable, CredentialVerifier
)
from services.normalizer import SENSITIVE_FIELDS, RowNormalizer
from store import procedures
from store.gateway import StoreGateway
from store.procedures import StoredProcedure
import logging

logger = logging.getLogger(__name__)


class LoginRealm:
    """
    Attributes:
        name: Realm name used in logs
        credential_table: The one table identities of this realm live in
        profile_procedure: Called with (identity, digest) after a successful
            check; None means the credential row itself is the profile
    """

    def __init__(
        self,
        name: str,
        credential_table: CredentialTable,
        profile_procedure: Optional[StoredProcedure] = None
    ):
        self.name = name
        self.credential_table = credential_table
        self.profile_procedure = profile_procedure

    def __repr__(self):
        return f"LoginRealm({self.name} -> {self.credential_table.name})"


MINES_ADMIN_REALM = LoginRealm("mines_admin", MINES_USERS, procedures.ADMIN_USER_GET)
INTRANET_REALM = LoginRealm("intranet", INTRANET_LOGIN)
ACCESS_REALM = LoginRealm("access", USER_ACCESS)


class LoginService:
    """
    login(identity, password) -> profile row without credential fields

    Raises:
        AuthError: unknown identity or wrong password
        NotFoundError: credential valid but no profile row
        BackendError: the store failed (propagated unchanged)
    """

    def __init__(self, gateway: StoreGateway, realm: LoginRealm):
        self.gateway = gateway
        self.realm = realm
        self.adapter = CredentialStoreAdapter(gateway, realm.credential_table)
        self.verifier = CredentialVerifier(self.adapter)
        self.normalizer = RowNormalizer(
            sensitive_fields=SENSITIVE_FIELDS | {a.lower() for a in realm.credential_table.digest_aliases}
        )

    async def login(self, identity: Any, password: str) -> Dict[str, Any]:
        stored_digest = await self.verifier.matched_digest(identity, password)
        if stored_digest is None:
            logger.info(f"Login rejected in realm {self.realm.name}")
            raise AuthError("Invalid credentials!", context={"realm": self.realm.name})

        profile = await self._fetch_profile(identity, stored_digest)
        if profile is None:
            raise NotFoundError("User data not found", context={"realm": self.realm.name})

        logger.info(f"Login accepted in realm {self.realm.name}")
        return profile

    async def _fetch_profile(self, identity: Any, digest: str) -> Optional[Dict[str, Any]]:
        if self.realm.profile_procedure is None:
            row = await self.adapter.fetch_row(identity)
            rows = [row] if row is not None else []
        else:
            row_set = await self.gateway.call(
                self.realm.profile_procedure,
                [identity, digest],
                context={"realm": self.realm.name},
            )
            rows = row_set.rows

        normalized = self.normalizer.normalize(rows)
        return normalized[0] if normalized else None
