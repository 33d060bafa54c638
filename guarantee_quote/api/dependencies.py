"""Dependency injection for FastAPI endpoints"""

import logging
import threading
from typing import Optional
from fastapi import Request
from guarantee_quote.config import settings
from guarantee_quote.domain.coupons import CouponStore, CouponRepository
from guarantee_quote.domain.exceptions import CouponStorageError
from guarantee_quote.infrastructure.database.repositories import SqlCouponRepository
from guarantee_quote.infrastructure.database.session import create_db_engine
from guarantee_quote.infrastructure.mail.dispatcher import NotificationDispatcher
from guarantee_quote.infrastructure.storage.json_file import JsonFileCouponRepository

_coupon_store: Optional[CouponStore] = None
_coupon_store_lock = threading.Lock()


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def build_coupon_repository() -> CouponRepository:
    """Repository for the configured coupon backend"""
    if settings.coupon_backend == "sql":
        repository = SqlCouponRepository(create_db_engine(settings.database_url))
        try:
            repository.create_schema()
        except CouponStorageError as e:
            logging.error(f"Coupon table unavailable: {e}")
        return repository
    return JsonFileCouponRepository(settings.coupon_store_path)


def get_coupon_store() -> CouponStore:
    """Provide the process-wide coupon store, loading it on first use"""
    global _coupon_store
    with _coupon_store_lock:
        if _coupon_store is None:
            store = CouponStore(build_coupon_repository())
            store.load()
            _coupon_store = store
        return _coupon_store


def get_dispatcher() -> NotificationDispatcher:
    """Provide quote email dispatcher instance"""
    return NotificationDispatcher()
