"""Data access layer for the coupon inventory"""

from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.engine import Engine
from guarantee_quote.infrastructure.database.models import Base, CouponRow
from guarantee_quote.infrastructure.database.session import create_session_factory
from guarantee_quote.domain.exceptions import CouponStorageError
from guarantee_quote.domain.models import Coupon


class SqlCouponRepository:
    """Repository for coupons backed by a relational table"""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = create_session_factory(engine)

    def create_schema(self) -> None:
        """Create the coupon table if it does not exist"""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise CouponStorageError(f"Cannot create coupon table: {e}") from e

    def load(self) -> Optional[List[Coupon]]:
        """Fetch all coupons; an empty table means the inventory was never seeded"""
        try:
            with self.session_factory() as db:
                rows = db.query(CouponRow).order_by(CouponRow.code).all()
        except SQLAlchemyError as e:
            raise CouponStorageError(f"Cannot read coupons: {e}") from e

        if not rows:
            return None
        return [Coupon(code=r.code, percent=r.percent, remaining=r.remaining) for r in rows]

    def save(self, coupons: List[Coupon]) -> None:
        """Upsert every coupon in a single transaction"""
        try:
            with self.session_factory() as db:
                for coupon in coupons:
                    db.merge(CouponRow(code=coupon.code, percent=coupon.percent, remaining=coupon.remaining))
                db.commit()
        except SQLAlchemyError as e:
            raise CouponStorageError(f"Cannot save coupons: {e}") from e
