from sqlalchemy import Column, Date, Float, String, Index
from models.base import Base, AuditMixin, BigIntegerPK


class DailyExcavationPlan(AuditMixin, Base):
    """
    Planned excavation quantities per face and shift.

    Natural key: (Prod_date, Shift, Loc_id, Face_Desc). The unique index
    lets the atomic upsert path rely on the store to reject duplicates.
    """
    __tablename__ = "mines_daily_excavation_plan"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)

    # Natural key
    Prod_date = Column(Date, nullable=False)
    Shift = Column(String(10), nullable=False)
    Loc_id = Column(String(50), nullable=False)
    Face_Desc = Column(String(200), nullable=False)

    # Quantities (cubic metres for OB, tonnes for ore grades)
    OB_QTY_Cum = Column(Float, nullable=True)
    ORE_QTY = Column(Float, nullable=True)
    HG_QTY = Column(Float, nullable=True)
    MG_QTY = Column(Float, nullable=True)
    LG_QTY = Column(Float, nullable=True)

    __table_args__ = (
        Index("uq_excavation_plan_key", "Prod_date", "Shift", "Loc_id", "Face_Desc", unique=True),
    )
