"""
Request-independent logic behind the HTTP routes.

Modules:
    hashing: Legacy credential digest
    credentials: CredentialTable, CredentialStoreAdapter, CredentialVerifier
    login: LoginRealm registry and LoginService
    normalizer: RowNormalizer (unwrap, date formatting, sensitive-field strip)
    entities: EntitySpec catalog of writable entities
    upsert: NaturalKey, UpsertOutcome, UpsertCoordinator

Usage:
    from services.login import LoginService, MINES_ADMIN_REALM
    from services.upsert import UpsertCoordinator
    from services.entities import DAILY_EXCAVATION

Example:
    coordinator = UpsertCoordinator(gateway)
    outcome = await coordinator.upsert(DAILY_EXCAVATION, payload)
    print(outcome.action.value)   # "created" or "updated"
"""

__all__ = [
    "hash_credential",
    "CredentialStoreAdapter",
    "CredentialVerifier",
    "LoginService",
    "RowNormalizer",
    "EntitySpec",
    "UpsertCoordinator",
]
