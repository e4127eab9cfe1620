"""
Unit tests for credential lookup and verification
"""

import pytest
from sqlalchemy.exc import OperationalError
from core.exceptions import AuthError, BackendError, BackendUnavailableError, NotFoundError
from services.credentials import (
    INTRANET_LOGIN, MINES_USERS, USER_ACCESS,
    CredentialStoreAdapter, CredentialTable, CredentialVerifier, digests_match
)
from services.hashing import hash_credential
from services.login import MINES_ADMIN_REALM, LoginService
from store import procedures
from tests.conftest import ACCESS_PASSWORD, ADMIN_PASSWORD, INTRANET_PASSWORD


class TestDigestsMatch:

    def test_case_insensitive(self):
        assert digests_match("ab12", "AB12")

    def test_length_must_match(self):
        assert not digests_match("ab12", "ab123")

    def test_missing_never_matches(self):
        assert not digests_match("ab12", None)
        assert not digests_match("", "")


class TestCredentialStoreAdapter:

    @pytest.mark.asyncio
    async def test_fetches_stored_digest(self, gateway):
        adapter = CredentialStoreAdapter(gateway, MINES_USERS)
        digest = await adapter.fetch_stored_digest("1001")
        assert digest == hash_credential(ADMIN_PASSWORD).upper()

    @pytest.mark.asyncio
    async def test_unknown_identity_is_absent(self, gateway):
        adapter = CredentialStoreAdapter(gateway, MINES_USERS)
        assert await adapter.fetch_stored_digest("9999") is None

    @pytest.mark.asyncio
    async def test_empty_stored_digest_is_absent(self, gateway, store):
        store.tables["mines_users"].append({"UserId": "2000", "password": "  "})
        adapter = CredentialStoreAdapter(gateway, MINES_USERS)
        assert await adapter.fetch_stored_digest("2000") is None

    @pytest.mark.asyncio
    async def test_reads_only_the_configured_table(self, gateway, store):
        adapter = CredentialStoreAdapter(gateway, INTRANET_LOGIN)
        await adapter.fetch_stored_digest("E77")
        assert store.selects == [("intranet_login", {"EMP_CODE": "E77"})]

    @pytest.mark.asyncio
    async def test_custom_table(self, gateway, store):
        store.tables["contractors"] = [{"CODE": "C1", "HASH": "abc"}]
        adapter = CredentialStoreAdapter(gateway, CredentialTable("contractors", "CODE", "HASH"))
        assert await adapter.fetch_stored_digest("C1") == "abc"

    @pytest.mark.asyncio
    async def test_fetch_row(self, gateway):
        adapter = CredentialStoreAdapter(gateway, USER_ACCESS)
        row = await adapter.fetch_row("A9")
        assert row["USER_ID"] == "A9"
        assert await adapter.fetch_row("nobody") is None

    def test_digest_column_is_always_an_alias(self):
        assert USER_ACCESS.digest_aliases == ("PASSWORD_HASH", "PASSWORD")
        assert MINES_USERS.digest_aliases == ("password",)


class TestCredentialVerifier:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("table, identity, password", [
        (MINES_USERS, "1001", ADMIN_PASSWORD),
        (INTRANET_LOGIN, "E77", INTRANET_PASSWORD),
        (USER_ACCESS, "A9", ACCESS_PASSWORD),
    ])
    async def test_correct_password(self, gateway, table, identity, password):
        verifier = CredentialVerifier(CredentialStoreAdapter(gateway, table))
        assert await verifier.verify(identity, password) is True

    @pytest.mark.asyncio
    async def test_stored_upper_case_digest_matches(self, gateway, store):
        # 1001's digest is stored upper-case in the fixture
        assert store.tables["mines_users"][0]["password"].isupper()
        verifier = CredentialVerifier(CredentialStoreAdapter(gateway, MINES_USERS))
        assert await verifier.verify("1001", ADMIN_PASSWORD)

    @pytest.mark.asyncio
    async def test_wrong_password(self, gateway):
        verifier = CredentialVerifier(CredentialStoreAdapter(gateway, MINES_USERS))
        assert await verifier.verify("1001", "wrong") is False

    @pytest.mark.asyncio
    async def test_unknown_identity_fails_closed(self, gateway):
        verifier = CredentialVerifier(CredentialStoreAdapter(gateway, MINES_USERS))
        assert await verifier.verify("9999", ADMIN_PASSWORD) is False

    @pytest.mark.asyncio
    async def test_identity_spaces_are_separate(self, gateway):
        # E77 exists only in intranet_login
        verifier = CredentialVerifier(CredentialStoreAdapter(gateway, MINES_USERS))
        assert await verifier.verify("E77", INTRANET_PASSWORD) is False

    @pytest.mark.asyncio
    async def test_backend_failure_propagates(self, gateway, store):
        store.fail_with = OperationalError("SELECT", {}, Exception("Lost connection"))
        verifier = CredentialVerifier(CredentialStoreAdapter(gateway, MINES_USERS))

        with pytest.raises(BackendUnavailableError) as exc_info:
            await verifier.verify("1001", ADMIN_PASSWORD)

        assert isinstance(exc_info.value, BackendError)
        assert ADMIN_PASSWORD not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_matched_digest_is_returned_as_stored(self, gateway, store):
        verifier = CredentialVerifier(CredentialStoreAdapter(gateway, MINES_USERS))

        digest = await verifier.matched_digest("1001", ADMIN_PASSWORD)

        assert digest == store.tables["mines_users"][0]["password"]
        assert digest.isupper()
        assert await verifier.matched_digest("1001", "wrong") is None


class TestLoginService:

    @pytest.mark.asyncio
    async def test_profile_procedure_receives_stored_digest(self, gateway, store):
        profile = await LoginService(gateway, MINES_ADMIN_REALM).login("1001", ADMIN_PASSWORD)

        assert profile["ROLE"] == "admin"
        assert "password" not in profile
        name, args = store.calls[-1]
        assert name == procedures.ADMIN_USER_GET.name
        assert args == ["1001", hash_credential(ADMIN_PASSWORD).upper()]

    @pytest.mark.asyncio
    async def test_valid_credential_without_profile(self, gateway):
        with pytest.raises(NotFoundError):
            await LoginService(gateway, MINES_ADMIN_REALM).login("1002", ADMIN_PASSWORD)

    @pytest.mark.asyncio
    async def test_wrong_password_never_calls_procedure(self, gateway, store):
        with pytest.raises(AuthError):
            await LoginService(gateway, MINES_ADMIN_REALM).login("1001", "wrong")

        assert store.calls == []
