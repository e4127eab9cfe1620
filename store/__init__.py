"""
Data store access layer.

Modules:
    gateway: StoreGateway (procedure calls and lookups with timeouts and error translation)
    procedures: StoredProcedure catalog with fixed positional arities
    rowsets: SingleRowSet / MultiRowSet tagged union and resolve_row_set

Usage:
    from store.gateway import StoreGateway
    from store import procedures

Example:
    async with database.session() as session:
        gateway = StoreGateway(session)
        row_set = await gateway.call(procedures.LOCATION_SHOW)
        print(row_set.rows)
"""

__all__ = [
    "StoreGateway",
    "StoredProcedure",
    "SingleRowSet",
    "MultiRowSet",
    "resolve_row_set",
]
