"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Union

# Form-style numeric input: numbers or strings, unparseable values price as 0
NumericInput = Optional[Union[int, float, str]]


class QuoteRequest(BaseModel):
    """Request body for POST /v1/quote"""

    duration: NumericInput = Field(None, description="Contract length in months (12, 24 or 36)")
    monthly_rent: NumericInput = Field(None, description="Monthly rent")
    monthly_fees: NumericInput = Field(None, description="Monthly building fees")
    coupon: str = Field("", description="Optional discount coupon code")


class PlanSchema(BaseModel):
    """Single payment plan in a quote"""

    name: str
    amount: int
    discount_percent: int
    surcharge_percent: int
    installments: int
    per_installment: bool
    selection: str = Field(..., description="Opaque value to post back to /v1/plan-selection")


class QuoteResponse(BaseModel):
    """Response for POST /v1/quote"""

    cost: int
    original_cost: int
    discount_applied: bool
    discount_percent: int
    discount_message: str
    plans: List[PlanSchema]


class PlanSelectionRequest(BaseModel):
    """Request body for POST /v1/plan-selection"""

    plan_choice: str = Field("", description='Selected plan as "name|amount"')


class PlanSelectionResponse(BaseModel):
    """Prefill for the contact step"""

    plan: str
    cost: int


class NotificationRequest(BaseModel):
    """Request body for POST /v1/notification"""

    email: str = ""
    cost: str = ""
    plan: str = ""
    name: str = ""
    surname: str = ""
    phone: str = ""

    @field_validator("cost", mode="before")
    @classmethod
    def cost_as_text(cls, value):
        if value is None:
            return ""
        return str(value)


class NotificationResponse(BaseModel):
    """Response for POST /v1/notification"""

    status: str
    success: bool
    email: str
    error: str
