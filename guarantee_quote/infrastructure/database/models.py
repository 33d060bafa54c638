"""SQLAlchemy ORM models for the coupon inventory"""

from sqlalchemy import Column, Integer, Text, DateTime, CheckConstraint
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class CouponRow(Base):
    """Coupon inventory record"""

    __tablename__ = "coupon"
    __table_args__ = (
        CheckConstraint("percent >= 0 AND percent <= 100", name="ck_coupon_percent"),
        CheckConstraint("remaining >= 0", name="ck_coupon_remaining"),
    )

    code = Column(Text, primary_key=True)
    percent = Column(Integer, nullable=False)
    remaining = Column(Integer, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
