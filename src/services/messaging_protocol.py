"""Messaging abstraction for the outbound side of the bot.

The reply dispatcher only depends on the MessagingService protocol, which
keeps it testable with an in-memory fake and keeps the fire-and-forget
policy in one place: WhatsAppMessagingService.send never raises.
"""

from typing import Protocol

import logfire

from src.config import Settings
from src.logging_config import mask_pii
from src.models.whatsapp import OutboundPayload


class MessagingService(Protocol):
    """Protocol for sending outbound payloads."""

    async def send(self, payload: OutboundPayload) -> bool:
        """Send one payload.

        Returns:
            True if the provider accepted the message, False otherwise
        """
        ...


class WhatsAppMessagingService:
    """WhatsApp Cloud API implementation of MessagingService.

    Wraps whatsapp_service.send_message and swallows every failure after
    logging it: a lost reply is acceptable, a failing webhook is not.

    Example:
        >>> service = WhatsAppMessagingService(settings)
        >>> await service.send(build_menu_payload("15551234567"))
        True
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    async def send(self, payload: OutboundPayload) -> bool:
        from src.services.whatsapp_service import send_message

        try:
            await send_message(self._settings, payload)
            return True
        except Exception as e:
            logfire.error(
                "WhatsAppMessagingService.send failed",
                recipient_id=mask_pii(payload.to),
                message_type=payload.type,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False


def get_messaging_service(settings: Settings) -> WhatsAppMessagingService:
    """Factory function to get a MessagingService implementation."""
    return WhatsAppMessagingService(settings)
