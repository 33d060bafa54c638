"""Coupon inventory with exactly-once redemption"""

import copy
import logging
import threading
from typing import Dict, List, Optional, Protocol

from guarantee_quote.domain.exceptions import CouponStorageError
from guarantee_quote.domain.models import Coupon, RedemptionResult, NOT_APPLICABLE

DEFAULT_COUPONS: List[Coupon] = [
    Coupon(code="RAICES10PLUS", percent=10, remaining=100_000),
    Coupon(code="ALQUILA20YA", percent=20, remaining=100_000),
    Coupon(code="MIHOGAR30", percent=30, remaining=100_000),
]


class CouponRepository(Protocol):
    """Durable medium holding the full coupon list"""

    def load(self) -> Optional[List[Coupon]]:
        """Return persisted coupons, None if nothing was persisted yet. Raises CouponStorageError if unreadable."""
        ...

    def save(self, coupons: List[Coupon]) -> None:
        """Replace the persisted coupons. Raises CouponStorageError on failure."""
        ...


class CouponStore:
    """
    In-memory coupon map with write-through persistence.

    A single lock spans lookup, decrement and the persistence write, so two
    concurrent redemptions of a code with one use left produce exactly one
    applied discount. A failed write is logged and the in-memory decrement
    stands: the durable copy may drift until the next successful save.
    """

    def __init__(self, repository: CouponRepository, defaults: Optional[List[Coupon]] = None):
        self.repository = repository
        self.defaults = defaults if defaults is not None else DEFAULT_COUPONS
        self._coupons: Dict[str, Coupon] = {}
        self._lock = threading.Lock()

    def load(self) -> None:
        """Restore coupons from the repository, seeding and persisting defaults if missing or corrupt"""
        with self._lock:
            try:
                stored = self.repository.load()
            except CouponStorageError as e:
                logging.error(f"Error loading coupons, falling back to defaults: {e}")
                stored = None

            if stored is None:
                self._coupons = {c.code: copy.copy(c) for c in self.defaults}
                logging.info("Seeded default coupons", extra={"coupon_count": len(self._coupons)})
                self._persist()
                return

            self._coupons = {c.code: c for c in stored}
            logging.info("Loaded coupons", extra={"coupon_count": len(self._coupons)})

    def save(self) -> None:
        """Flush the full coupon map to the repository"""
        with self._lock:
            self._persist()

    def redeem(self, code: str) -> RedemptionResult:
        """
        Consume one use of `code`.

        Returns NOT_APPLICABLE for unknown or exhausted codes. Codes are
        case-sensitive.
        """
        with self._lock:
            coupon = self._coupons.get(code)
            if coupon is None or coupon.remaining <= 0:
                logging.info("Coupon not applicable", extra={"coupon_code": code})
                return NOT_APPLICABLE

            coupon.remaining -= 1
            self._persist()
            logging.info(
                "Coupon redeemed",
                extra={"coupon_code": code, "percent": coupon.percent, "remaining": coupon.remaining},
            )
            return RedemptionResult(applied=True, percent=coupon.percent)

    def get(self, code: str) -> Optional[Coupon]:
        """Return a copy of a coupon, or None if the code is unknown"""
        with self._lock:
            coupon = self._coupons.get(code)
            return copy.copy(coupon) if coupon is not None else None

    def snapshot(self) -> List[Coupon]:
        """Return copies of every coupon, ordered by code"""
        with self._lock:
            return [copy.copy(self._coupons[code]) for code in sorted(self._coupons)]

    def _persist(self) -> None:
        # Caller holds the lock
        coupons = [copy.copy(self._coupons[code]) for code in sorted(self._coupons)]
        try:
            self.repository.save(coupons)
        except CouponStorageError as e:
            logging.error(f"Error saving coupons: {e}")
