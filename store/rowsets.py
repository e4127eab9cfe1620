"""
Row set shapes returned by the data store.

A stored-procedure call may come back as a flat sequence of rows or as a
sequence of result sets whose first element holds the rows. Both shapes are
resolved once, here, into a tagged union so nothing downstream has to
inspect the raw shape again.
"""

from typing import Any, List, Mapping, Sequence, Union


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _to_row(value: Any) -> Any:
    """Convert driver rows (SQLAlchemy Row, RowMapping) to plain dicts"""
    if isinstance(value, dict):
        return value
    if hasattr(value, "_mapping"):
        return dict(value._mapping)
    if isinstance(value, Mapping):
        return dict(value)
    return value


class SingleRowSet:
    """One flat result set"""

    def __init__(self, rows: Sequence[Any]):
        self.rows: List[Any] = [_to_row(r) for r in rows]

    @property
    def result_sets(self) -> List[List[Any]]:
        return [self.rows]

    def first(self):
        return self.rows[0] if self.rows else None

    def __len__(self):
        return len(self.rows)

    def __repr__(self):
        return f"SingleRowSet(rows={len(self.rows)})"


class MultiRowSet:
    """
    Several result sets from one call. The first set carries the rows;
    trailing non-sequence entries (status packets) are kept in `trailer`.
    """

    def __init__(self, result_sets: Sequence[Sequence[Any]], trailer: Sequence[Any] = ()):
        self.result_sets: List[List[Any]] = [[_to_row(r) for r in rs] for rs in result_sets]
        self.trailer = list(trailer)

    @property
    def rows(self) -> List[Any]:
        return self.result_sets[0] if self.result_sets else []

    def first(self):
        rows = self.rows
        return rows[0] if rows else None

    def __len__(self):
        return len(self.rows)

    def __repr__(self):
        return f"MultiRowSet(result_sets={len(self.result_sets)}, rows={len(self.rows)})"


RowSet = Union[SingleRowSet, MultiRowSet]


def resolve_row_set(raw: Any) -> RowSet:
    """
    Resolve a raw store result into a RowSet.

    Unwraps exactly one level: when the first element of `raw` is itself a
    sequence the result is a MultiRowSet, otherwise `raw` is the row list.
    A RowSet passed in is returned as-is, and None becomes an empty set.
    """
    if isinstance(raw, (SingleRowSet, MultiRowSet)):
        return raw
    if raw is None:
        return SingleRowSet([])
    if not _is_sequence(raw):
        return SingleRowSet([raw])
    if raw and _is_sequence(raw[0]):
        sets = [item for item in raw if _is_sequence(item)]
        trailer = [item for item in raw if not _is_sequence(item)]
        return MultiRowSet(sets, trailer)
    return SingleRowSet(raw)
