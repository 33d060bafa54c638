"""Unit tests for coupon redemption"""

import json
import threading
import time
import pytest
from typing import List, Optional
from guarantee_quote.domain.coupons import CouponStore, DEFAULT_COUPONS
from guarantee_quote.domain.exceptions import CouponStorageError
from guarantee_quote.domain.models import Coupon, NOT_APPLICABLE
from guarantee_quote.infrastructure.storage.json_file import JsonFileCouponRepository


class FailingSaveRepository:
    """Loads a fixed inventory, refuses every write"""

    def __init__(self, coupons: List[Coupon]):
        self.coupons = coupons
        self.save_attempts = 0

    def load(self) -> Optional[List[Coupon]]:
        return self.coupons

    def save(self, coupons: List[Coupon]) -> None:
        self.save_attempts += 1
        raise CouponStorageError("disk full")


class SlowRepository:
    """In-memory repository whose writes take a while, widening any race window"""

    def __init__(self, coupons: List[Coupon]):
        self.coupons = coupons

    def load(self) -> Optional[List[Coupon]]:
        return self.coupons

    def save(self, coupons: List[Coupon]) -> None:
        time.sleep(0.01)
        self.coupons = coupons


def test_load_seeds_defaults_when_missing(coupon_path):
    store = CouponStore(JsonFileCouponRepository(coupon_path))

    store.load()

    assert [c.code for c in store.snapshot()] == sorted(c.code for c in DEFAULT_COUPONS)
    assert store.get("MIHOGAR30").percent == 30
    assert store.get("MIHOGAR30").remaining == 100_000
    # Defaults are persisted right away
    persisted = json.loads(coupon_path.read_text())
    assert {r["code"] for r in persisted} == {"RAICES10PLUS", "ALQUILA20YA", "MIHOGAR30"}


def test_load_corrupt_file_falls_back_to_defaults(coupon_path):
    coupon_path.write_text("{not json")
    store = CouponStore(JsonFileCouponRepository(coupon_path))

    store.load()

    assert store.get("RAICES10PLUS") is not None
    assert len(json.loads(coupon_path.read_text())) == len(DEFAULT_COUPONS)


def test_load_existing_inventory(coupon_path):
    coupon_path.write_text(json.dumps([{"code": "PROMO5", "percent": 5, "remaining": 2}]))
    store = CouponStore(JsonFileCouponRepository(coupon_path))

    store.load()

    assert store.get("PROMO5") == Coupon(code="PROMO5", percent=5, remaining=2)
    assert store.get("RAICES10PLUS") is None


def test_redeem_decrements_and_persists(coupon_store: CouponStore, coupon_path):
    result = coupon_store.redeem("RAICES10PLUS")

    assert result.applied is True
    assert result.percent == 10
    assert coupon_store.get("RAICES10PLUS").remaining == 4

    reloaded = CouponStore(JsonFileCouponRepository(coupon_path))
    reloaded.load()
    assert reloaded.get("RAICES10PLUS").remaining == 4


def test_redeem_unknown_code(coupon_store: CouponStore):
    assert coupon_store.redeem("NOEXISTE") == NOT_APPLICABLE


def test_redeem_exhausted_code(coupon_store: CouponStore):
    assert coupon_store.redeem("ALQUILA20YA").applied is True
    assert coupon_store.redeem("ALQUILA20YA") == NOT_APPLICABLE
    assert coupon_store.get("ALQUILA20YA").remaining == 0


def test_concurrent_redemptions_of_last_use():
    """Two requests racing for the last use: exactly one wins"""
    store = CouponStore(SlowRepository([Coupon(code="ULTIMO", percent=20, remaining=1)]))
    store.load()
    barrier = threading.Barrier(2)
    results = []

    def redeem():
        barrier.wait()
        results.append(store.redeem("ULTIMO"))

    threads = [threading.Thread(target=redeem) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(r.applied for r in results) == [False, True]
    assert store.get("ULTIMO").remaining == 0


def test_concurrent_redemptions_never_over_redeem():
    store = CouponStore(SlowRepository([Coupon(code="CINCO", percent=10, remaining=5)]))
    store.load()
    barrier = threading.Barrier(20)
    results = []
    results_lock = threading.Lock()

    def redeem():
        barrier.wait()
        result = store.redeem("CINCO")
        with results_lock:
            results.append(result)

    threads = [threading.Thread(target=redeem) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sum(1 for r in results if r.applied) == 5
    assert store.get("CINCO").remaining == 0


def test_save_failure_keeps_in_memory_decrement():
    repository = FailingSaveRepository([Coupon(code="PROMO", percent=15, remaining=3)])
    store = CouponStore(repository)
    store.load()

    result = store.redeem("PROMO")

    assert result.applied is True
    assert store.get("PROMO").remaining == 2
    assert repository.save_attempts == 1


def test_get_returns_copy(coupon_store: CouponStore):
    coupon = coupon_store.get("RAICES10PLUS")
    coupon.remaining = 0

    assert coupon_store.get("RAICES10PLUS").remaining == 5


@pytest.mark.parametrize("code", ["", " RAICES10PLUS", "RAICES10PLUS "])
def test_redeem_requires_exact_code(coupon_store: CouponStore, code):
    assert coupon_store.redeem(code).applied is False
