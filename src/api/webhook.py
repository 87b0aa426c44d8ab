"""WhatsApp webhook endpoints.

GET answers Meta's one-time subscription handshake. POST receives message
events, acknowledges them immediately and sends the replies from a
background task, so the acknowledgement never waits on (or fails because
of) the Cloud API.
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from src.config import Settings, get_settings
from src.constants import WEBHOOK_SUBSCRIBE_MODE, WHATSAPP_BUSINESS_ACCOUNT_OBJECT
from src.logging_config import mask_pii
from src.models.whatsapp import WebhookEvent
from src.services.reply_dispatcher import get_reply_dispatcher

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def verify_webhook(request: Request, settings: Settings = Depends(get_settings)):
    """WhatsApp webhook verification endpoint."""
    mode = request.query_params.get("hub.mode")
    token = request.query_params.get("hub.verify_token")
    challenge = request.query_params.get("hub.challenge")

    if mode == WEBHOOK_SUBSCRIBE_MODE and token == settings.whatsapp_webhook_verify_token:
        logger.info("Webhook verified successfully")
        return PlainTextResponse(challenge or "")

    logger.warning("Webhook verification failed (mode=%s)", mode)
    return Response(status_code=403)


@router.post("")
async def handle_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
):
    """Handle incoming WhatsApp webhook events."""
    try:
        payload = await request.json()
    except ValueError:
        logger.warning("Webhook body is not valid JSON")
        return JSONResponse(status_code=404, content={"status": "ignored"})

    if not isinstance(payload, dict) or payload.get("object") != WHATSAPP_BUSINESS_ACCOUNT_OBJECT:
        return JSONResponse(status_code=404, content={"status": "ignored"})

    try:
        message = WebhookEvent.model_validate(payload).first_message()
    except ValidationError as e:
        logger.warning("Unparseable WhatsApp message: %s", e.error_count())
        return {"status": "ok"}

    if message is None:
        return {"status": "ok"}

    logger.info(
        "Received %s message %s from %s",
        message.type,
        message.id,
        mask_pii(message.sender),
    )

    dispatcher = get_reply_dispatcher(settings)
    background_tasks.add_task(dispatcher.dispatch, message)

    return {"status": "ok"}
