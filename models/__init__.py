"""
SQLAlchemy ORM models for the operational tables.

The stored procedures own these tables; the models mirror them so the
atomic upsert path can issue INSERT ... ON DUPLICATE KEY UPDATE (MySQL) or
INSERT ... ON CONFLICT DO UPDATE (PostgreSQL) against the natural-key
unique index, and so scripts/init_db.py can create that index.

Models:
    base: Declarative Base, AuditMixin and the UpsertAction enum
    excavation: DailyExcavationPlan
    geology: GeologicalSample
    production: ProductionDispatch
    equipment: EquipmentEngagement, FuelIssue
    kpi: KPIDailyActual

Usage:
    from models.excavation import DailyExcavationPlan
    from models.base import Base, UpsertAction
"""

__all__ = [
    "Base",
    "UpsertAction",
    "DailyExcavationPlan",
    "GeologicalSample",
    "ProductionDispatch",
    "EquipmentEngagement",
    "FuelIssue",
    "KPIDailyActual",
]
