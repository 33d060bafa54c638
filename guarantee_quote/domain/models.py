"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from enum import Enum


@dataclass
class Coupon:
    """Finite-use discount token"""

    code: str
    percent: int
    remaining: int


@dataclass(frozen=True)
class RedemptionResult:
    """Outcome of a coupon redemption attempt (applied=False means not applicable)"""

    applied: bool
    percent: int = 0


NOT_APPLICABLE = RedemptionResult(applied=False, percent=0)


@dataclass
class Quote:
    """Priced guarantee request"""

    original_cost: int
    discounted_cost: int
    discount_percent: int
    discount_message: str

    @property
    def discount_applied(self) -> bool:
        return self.discount_percent > 0


@dataclass(frozen=True)
class PlanDefinition:
    """Static description of a payment plan"""

    name: str
    discount_percent: int = 0
    surcharge_percent: int = 0
    installments: int = 1

    @property
    def per_installment(self) -> bool:
        return self.installments > 1


@dataclass
class PaymentPlan:
    """Payment plan priced for a specific quote"""

    name: str
    amount: int
    discount_percent: int
    surcharge_percent: int
    installments: int
    per_installment: bool


@dataclass
class PlanSelection:
    """Plan chosen by the prospect, carried forward to the email step"""

    plan: str
    cost: int


@dataclass
class ContactDetails:
    """Prospect contact information"""

    email: str = ""
    name: str = ""
    surname: str = ""
    phone: str = ""


class DeliveryStatus(str, Enum):
    SENT = "sent"
    SKIPPED = "skipped"
    VALIDATION_ERROR = "validation_error"
    TRANSPORT_ERROR = "transport_error"
    TIMEOUT = "timeout"


@dataclass
class DeliveryOutcome:
    """Terminal result of a quote email dispatch"""

    status: DeliveryStatus
    email: str = ""
    error: str = ""

    @property
    def success(self) -> bool:
        return self.status == DeliveryStatus.SENT
