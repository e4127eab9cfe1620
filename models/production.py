from sqlalchemy import Column, Date, Float, Integer, String, Index
from models.base import Base, AuditMixin, BigIntegerPK


class ProductionDispatch(AuditMixin, Base):
    """
    Material moved from a location to a destination during a shift.

    Natural key: (Prod_date, Shift, Loc_id, Destination, Material_type).
    """
    __tablename__ = "mines_production_dispatch"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)

    Prod_date = Column(Date, nullable=False)
    Shift = Column(String(10), nullable=False)
    Loc_id = Column(String(50), nullable=False)
    Destination = Column(String(100), nullable=False)
    Material_type = Column(String(50), nullable=False)

    Trips = Column(Integer, nullable=True)
    Qty_MT = Column(Float, nullable=True)

    __table_args__ = (
        Index(
            "uq_production_dispatch_key",
            "Prod_date", "Shift", "Loc_id", "Destination", "Material_type",
            unique=True
        ),
    )
