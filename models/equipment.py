from sqlalchemy import Column, Date, Float, String, Text, Index
from models.base import Base, AuditMixin, BigIntegerPK


class EquipmentEngagement(AuditMixin, Base):
    """
    Hours split and status of one machine for one shift.

    Natural key: (Eng_date, Shift, Equipment_id).
    """
    __tablename__ = "mines_equipment_engagement"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)

    Eng_date = Column(Date, nullable=False)
    Shift = Column(String(10), nullable=False)
    Equipment_id = Column(String(50), nullable=False)

    Loc_id = Column(String(50), nullable=True)
    Working_hrs = Column(Float, nullable=True)
    Idle_hrs = Column(Float, nullable=True)
    Breakdown_hrs = Column(Float, nullable=True)
    Status = Column(String(30), nullable=True)  # working, idle, breakdown, maintenance
    Remarks = Column(Text, nullable=True)

    __table_args__ = (
        Index("uq_equipment_engagement_key", "Eng_date", "Shift", "Equipment_id", unique=True),
    )


class FuelIssue(AuditMixin, Base):
    """
    Fuel issued to one machine in a shift.

    Natural key: (Issue_date, Shift, Equipment_id).
    """
    __tablename__ = "mines_fuel_issue"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)

    Issue_date = Column(Date, nullable=False)
    Shift = Column(String(10), nullable=False)
    Equipment_id = Column(String(50), nullable=False)

    Fuel_qty_ltr = Column(Float, nullable=True)
    HMR_reading = Column(Float, nullable=True)  # hour meter reading at issue
    Issued_by = Column(String(100), nullable=True)

    __table_args__ = (
        Index("uq_fuel_issue_key", "Issue_date", "Shift", "Equipment_id", unique=True),
    )
