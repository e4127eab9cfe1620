from sqlalchemy import BigInteger, Column, DateTime, Integer, String
from sqlalchemy.orm import declarative_base
from datetime import datetime
import enum

Base = declarative_base()

# SQLite only autoincrements an INTEGER PRIMARY KEY
BigIntegerPK = BigInteger().with_variant(Integer, "sqlite")

# ============================================================================
# ENUMS
# ============================================================================

class UpsertAction(str, enum.Enum):
    """Branch taken by an upsert"""
    CREATED = "created"
    UPDATED = "updated"


# ============================================================================
# MIXINS
# ============================================================================

class AuditMixin:
    """Who wrote the row and when"""
    userId = Column(String(50), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
