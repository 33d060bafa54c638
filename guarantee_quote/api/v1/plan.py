"""POST /v1/plan-selection - decode the plan a prospect picked"""

from fastapi import APIRouter

from guarantee_quote.api.v1.schemas import PlanSelectionRequest, PlanSelectionResponse
from guarantee_quote.domain.plans import parse_plan_selection

router = APIRouter()


@router.post("/plan-selection", response_model=PlanSelectionResponse)
def select_plan(request_body: PlanSelectionRequest):
    """Turn the posted "name|amount" value into the plan and cost for the contact form"""
    selection = parse_plan_selection(request_body.plan_choice)
    return PlanSelectionResponse(plan=selection.plan, cost=selection.cost)
