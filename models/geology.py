from sqlalchemy import Column, Date, Float, String, Text, Index
from models.base import Base, AuditMixin, BigIntegerPK


class GeologicalSample(AuditMixin, Base):
    """
    Assay results for one sample drawn at a location during a shift.

    Natural key: (Sample_date, Shift, Loc_id, Sample_no).
    """
    __tablename__ = "mines_geological_sample"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)

    Sample_date = Column(Date, nullable=False)
    Shift = Column(String(10), nullable=False)
    Loc_id = Column(String(50), nullable=False)
    Sample_no = Column(String(50), nullable=False)

    # Assay (percent by weight)
    Fe_pct = Column(Float, nullable=True)
    SiO2_pct = Column(Float, nullable=True)
    Al2O3_pct = Column(Float, nullable=True)
    Mn_pct = Column(Float, nullable=True)
    Moisture_pct = Column(Float, nullable=True)
    Remarks = Column(Text, nullable=True)

    __table_args__ = (
        Index("uq_geological_sample_key", "Sample_date", "Shift", "Loc_id", "Sample_no", unique=True),
    )
