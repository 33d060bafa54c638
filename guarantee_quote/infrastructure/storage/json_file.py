"""JSON file persistence for the coupon inventory"""

import os
import tempfile
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from guarantee_quote.domain.exceptions import CouponStorageError
from guarantee_quote.domain.models import Coupon


class CouponRecord(BaseModel):
    """On-disk shape of a single coupon"""

    code: str = Field(..., min_length=1)
    percent: int = Field(..., ge=0, le=100)
    remaining: int = Field(..., ge=0)


_records_adapter = TypeAdapter(List[CouponRecord])


class JsonFileCouponRepository:
    """
    Stores coupons as a JSON list of {code, percent, remaining} records.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a crash mid-write never leaves a truncated file behind.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> Optional[List[Coupon]]:
        if not self.path.exists():
            return None

        try:
            records = _records_adapter.validate_json(self.path.read_bytes())
        except OSError as e:
            raise CouponStorageError(f"Cannot read {self.path}: {e}") from e
        except ValidationError as e:
            raise CouponStorageError(f"Invalid coupon data in {self.path}: {e}") from e

        return [Coupon(code=r.code, percent=r.percent, remaining=r.remaining) for r in records]

    def save(self, coupons: List[Coupon]) -> None:
        records = [CouponRecord(code=c.code, percent=c.percent, remaining=c.remaining) for c in coupons]
        data = _records_adapter.dump_json(records, indent=2)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise CouponStorageError(f"Cannot write {self.path}: {e}") from e
