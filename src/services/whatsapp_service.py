"""Send messages through the WhatsApp Cloud API."""

import time

import httpx
import logfire

from src.config import Settings
from src.constants import MAX_LOGGED_RESPONSE_BODY_CHARS
from src.logging_config import mask_pii
from src.models.whatsapp import OutboundPayload


async def send_message(settings: Settings, payload: OutboundPayload) -> str | None:
    """
    Send a message payload via the WhatsApp Cloud API.

    Args:
        settings: Application settings (access token, phone number ID, timeout)
        payload: Text or interactive payload addressed to one recipient

    Returns:
        The provider message ID, if the response carried one

    Raises:
        httpx.HTTPStatusError: The provider rejected the message
        httpx.RequestError: The request never completed (DNS, connect, timeout)
    """
    start_time = time.time()
    recipient = mask_pii(payload.to)

    logfire.info(
        "Sending WhatsApp message",
        recipient_id=recipient,
        message_type=payload.type,
        api_version=settings.graph_api_version,
    )

    headers = {
        "Authorization": f"Bearer {settings.meta_access_token}",
        "Content-Type": "application/json",
    }
    body = payload.model_dump(exclude_none=True)

    try:
        async with httpx.AsyncClient(timeout=settings.whatsapp_api_timeout_seconds) as client:
            response = await client.post(settings.messages_url, headers=headers, json=body)
            elapsed = time.time() - start_time

            if response.is_success:
                message_id = _first_message_id(response)
                logfire.info(
                    "WhatsApp message sent successfully",
                    recipient_id=recipient,
                    message_type=payload.type,
                    status_code=response.status_code,
                    message_id=message_id,
                    response_time_ms=elapsed * 1000,
                )
                return message_id

            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        elapsed = time.time() - start_time
        logfire.error(
            "WhatsApp API HTTP error",
            recipient_id=recipient,
            message_type=payload.type,
            status_code=e.response.status_code,
            response_body=e.response.text[:MAX_LOGGED_RESPONSE_BODY_CHARS],
            error_type=type(e).__name__,
            response_time_ms=elapsed * 1000,
        )
        raise
    except httpx.RequestError as e:
        elapsed = time.time() - start_time
        logfire.error(
            "WhatsApp API request error",
            recipient_id=recipient,
            message_type=payload.type,
            error=str(e),
            error_type=type(e).__name__,
            response_time_ms=elapsed * 1000,
        )
        raise


def _first_message_id(response: httpx.Response) -> str | None:
    """Extract messages[0].id from a Cloud API send response."""
    try:
        data = response.json()
    except ValueError:
        return None
    messages = data.get("messages") if isinstance(data, dict) else None
    if not messages or not isinstance(messages[0], dict):
        return None
    message_id = messages[0].get("id")
    return str(message_id) if message_id is not None else None
