from sqlalchemy import Column, Date, Float, String, Index
from models.base import Base, AuditMixin, BigIntegerPK


class KPIDailyActual(AuditMixin, Base):
    """
    Daily KPI actual against target, shared by the HR, Finance and
    Environment dashboards (func_id tells them apart).

    Natural key: (date, plant_id, func_id, kpi_code).
    """
    __tablename__ = "kpi_daily_actual"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)

    date = Column(Date, nullable=False)
    plant_id = Column(String(50), nullable=False)
    func_id = Column(String(50), nullable=False)
    kpi_code = Column(String(50), nullable=False)

    uom = Column(String(30), nullable=True)
    hr_target = Column(Float, nullable=True)
    actual_data = Column(Float, nullable=True)

    __table_args__ = (
        Index("uq_kpi_daily_actual_key", "date", "plant_id", "func_id", "kpi_code", unique=True),
    )
