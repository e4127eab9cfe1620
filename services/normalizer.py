"""
Normalize store results into JSON-safe row lists.
"""

from typing import Any, Dict, Iterable, List, Optional
from datetime import date, datetime
from store.rowsets import resolve_row_set
import logging

logger = logging.getLogger(__name__)

# Every column name a credential digest has been stored under
SENSITIVE_FIELDS = frozenset({
    "password",
    "password_hash",
    "passwd",
    "pwd",
    "user_pwd",
})


class RowNormalizer:
    """
    Shape rows for the caller.

    Handles:
    - One level of result-set nesting
    - Date fields reformatted to YYYY-MM-DD
    - Sensitive fields removed under any alias (case-insensitive)
    """

    def __init__(
        self,
        date_fields: Iterable[str] = (),
        sensitive_fields: Iterable[str] = SENSITIVE_FIELDS
    ):
        self.date_fields = frozenset(date_fields)
        self.sensitive_fields = frozenset(f.lower() for f in sensitive_fields)

    def normalize(self, raw: Any) -> List[Any]:
        rows = resolve_row_set(raw).rows
        return [self.normalize_row(row) for row in rows]

    def normalize_row(self, row: Any) -> Any:
        if not isinstance(row, dict):
            return row

        normalized: Dict[str, Any] = {}
        for key, value in row.items():
            if str(key).lower() in self.sensitive_fields:
                continue
            if key in self.date_fields:
                value = self.format_date(value)
            normalized[key] = value
        return normalized

    @staticmethod
    def format_date(value: Any) -> Optional[str]:
        """Reduce a timestamp to its calendar date"""
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            value = value.date()
        if isinstance(value, date):
            return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        try:
            parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
        except ValueError:
            logger.debug(f"Leaving unparseable date value as-is: {value!r}")
            return value
        return f"{parsed.year:04d}-{parsed.month:02d}-{parsed.day:02d}"
