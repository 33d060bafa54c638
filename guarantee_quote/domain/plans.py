"""Payment plan generation for a quoted guarantee"""

import logging
from typing import List
from guarantee_quote.domain.models import PlanDefinition, PaymentPlan, PlanSelection
from guarantee_quote.utils.numbers import round_half_away, parse_int

# Presentation order is part of the contract: callers pick plans by position/name
PLAN_DEFINITIONS: List[PlanDefinition] = [
    PlanDefinition(name="Lump sum"),
    PlanDefinition(name="Bank transfer", discount_percent=15),
    PlanDefinition(name="3 installments", installments=3),
    PlanDefinition(name="6 installments", installments=6),
    PlanDefinition(name="12 installments", surcharge_percent=10, installments=12),
]

PLAN_SELECTION_SEPARATOR = "|"


def plan_total(cost: float, definition: PlanDefinition) -> float:
    """Full amount payable under a plan, before splitting into installments"""
    total = cost * (1 - definition.discount_percent / 100)
    if definition.surcharge_percent:
        total = total * (1 + definition.surcharge_percent / 100)
    return total


def build_plan(cost: int, definition: PlanDefinition) -> PaymentPlan:
    total = plan_total(cost, definition)
    if definition.per_installment:
        amount = round_half_away(total / definition.installments)
    else:
        amount = round_half_away(total)

    return PaymentPlan(
        name=definition.name,
        amount=amount,
        discount_percent=definition.discount_percent,
        surcharge_percent=definition.surcharge_percent,
        installments=definition.installments,
        per_installment=definition.per_installment,
    )


def build_plans(discounted_cost: int) -> List[PaymentPlan]:
    """
    Expand a discounted cost into every payment plan, in presentation order.

    Zero and negative costs are priced the same way; the output always has
    one entry per plan definition.

    Example:
        864 -> Lump sum 864, Bank transfer 734, 3 x 288, 6 x 144, 12 x 79
    """
    plans = [build_plan(discounted_cost, definition) for definition in PLAN_DEFINITIONS]
    for plan in plans:
        logging.debug(
            "Plan computed",
            extra={"plan": plan.name, "amount": plan.amount, "per_installment": plan.per_installment},
        )
    return plans


def format_plan_selection(plan: PaymentPlan) -> str:
    """Encode a plan as the opaque value a front-end posts back on selection"""
    return f"{plan.name}{PLAN_SELECTION_SEPARATOR}{plan.amount}"


def parse_plan_selection(value: str) -> PlanSelection:
    """
    Decode a "name|amount" selection value.

    Never raises: a missing or non-numeric amount yields cost 0.
    """
    name, _, amount = (value or "").partition(PLAN_SELECTION_SEPARATOR)
    return PlanSelection(plan=name.strip(), cost=parse_int(amount))
