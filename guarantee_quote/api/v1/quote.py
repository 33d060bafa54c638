"""POST /v1/quote - price a guarantee and list its payment plans"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from guarantee_quote.api.v1.schemas import QuoteRequest, QuoteResponse, PlanSchema
from guarantee_quote.api.dependencies import get_coupon_store, get_request_id
from guarantee_quote.domain.coupons import CouponStore
from guarantee_quote.domain.pricing import compute_cost
from guarantee_quote.domain.plans import build_plans, format_plan_selection
from guarantee_quote.infrastructure.observability.metrics import record_quote
from guarantee_quote.infrastructure.observability.logging import log_quote
from guarantee_quote.utils.numbers import parse_int, parse_float

router = APIRouter()


@router.post("/quote", response_model=QuoteResponse)
def create_quote(
    request_body: QuoteRequest,
    request: Request,
    store: CouponStore = Depends(get_coupon_store),
):
    """
    Price a rental guarantee.

    Flow:
    1. Parse inputs leniently (unparseable numbers count as 0)
    2. Apply duration multiplier and redeem the coupon, if any
    3. Expand the discounted cost into every payment plan
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        duration = parse_int(request_body.duration)
        quote = compute_cost(
            duration,
            parse_float(request_body.monthly_rent),
            parse_float(request_body.monthly_fees),
            request_body.coupon,
            store,
        )
        plans = build_plans(quote.discounted_cost)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_quote(duration, bool(request_body.coupon), quote.discount_applied)
    log_quote(
        request_id,
        duration,
        quote.original_cost,
        quote.discounted_cost,
        quote.discount_percent,
        duration_ms,
    )

    return QuoteResponse(
        cost=quote.discounted_cost,
        original_cost=quote.original_cost,
        discount_applied=quote.discount_applied,
        discount_percent=quote.discount_percent,
        discount_message=quote.discount_message,
        plans=[
            PlanSchema(
                name=plan.name,
                amount=plan.amount,
                discount_percent=plan.discount_percent,
                surcharge_percent=plan.surcharge_percent,
                installments=plan.installments,
                per_installment=plan.per_installment,
                selection=format_plan_selection(plan),
            )
            for plan in plans
        ],
    )
