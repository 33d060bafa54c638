"""POST /v1/notification - email the finalized quote"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from guarantee_quote.api.v1.schemas import NotificationRequest, NotificationResponse
from guarantee_quote.api.dependencies import get_dispatcher, get_request_id
from guarantee_quote.domain.models import ContactDetails
from guarantee_quote.infrastructure.mail.dispatcher import NotificationDispatcher

router = APIRouter()


@router.post("/notification", response_model=NotificationResponse)
def send_notification(
    request_body: NotificationRequest,
    request: Request,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Send the quote to the prospect and the admin.

    Delivery problems are not HTTP errors: the response always carries the
    outcome (sent, skipped, validation_error, transport_error or timeout).
    Blocks for at most the dispatch deadline.
    """
    request_id = get_request_id(request)
    contact = ContactDetails(
        email=request_body.email,
        name=request_body.name,
        surname=request_body.surname,
        phone=request_body.phone,
    )

    try:
        outcome = dispatcher.send(request_body.cost, request_body.plan, contact)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    logging.info(
        "Notification handled",
        extra={"request_id": request_id, "status": outcome.status.value},
    )
    return NotificationResponse(
        status=outcome.status.value,
        success=outcome.success,
        email=outcome.email,
        error=outcome.error,
    )
