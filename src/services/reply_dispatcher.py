"""Map an inbound WhatsApp message to the outbound replies.

Every message is evaluated on its own; there is no conversation state.

- A tapped menu row or an exact numeric text ("1".."4") gets the matching
  FAQ answer.
- Any other text gets the menu only.
- Anything else (unknown row, images, button replies...) gets the default
  answer.

Whenever a text answer is sent, the menu is sent again right after it so
the options stay visible on every turn.
"""

from __future__ import annotations

import logfire

from src.config import Settings
from src.logging_config import mask_pii
from src.models.whatsapp import InboundMessage, OutboundPayload
from src.services.faq import (
    DEFAULT_REPLY,
    build_menu_payload,
    build_text_payload,
    lookup_reply,
)
from src.services.messaging_protocol import MessagingService, get_messaging_service


def resolve_reply_text(message: InboundMessage) -> str | None:
    """Resolve the FAQ answer for a message.

    Returns:
        The answer text, or None when the message is free text that should
        be answered with the menu alone
    """
    if message.is_list_reply:
        return lookup_reply(message.selected_option_id) or DEFAULT_REPLY

    if message.is_text:
        return lookup_reply(message.text_body.strip())

    return DEFAULT_REPLY


class ReplyDispatcher:
    """Builds and sends the replies for one inbound message.

    Args:
        messaging: Outbound messaging service; its send() must not raise
    """

    def __init__(self, messaging: MessagingService):
        self._messaging = messaging

    def plan(self, message: InboundMessage) -> list[OutboundPayload]:
        """Return the payloads to send, in order."""
        recipient_id = message.sender
        reply_text = resolve_reply_text(message)

        if reply_text is None:
            return [build_menu_payload(recipient_id)]

        return [
            build_text_payload(recipient_id, reply_text),
            build_menu_payload(recipient_id),
        ]

    async def dispatch(self, message: InboundMessage) -> int:
        """Send every planned payload; one failed send does not stop the next.

        Returns:
            Number of payloads the provider accepted
        """
        payloads = self.plan(message)

        logfire.info(
            "Dispatching replies",
            recipient_id=mask_pii(message.sender),
            message_type=message.type,
            outbound_count=len(payloads),
        )

        delivered = 0
        for payload in payloads:
            if await self._messaging.send(payload):
                delivered += 1

        if delivered < len(payloads):
            logfire.warn(
                "Some replies were not delivered",
                recipient_id=mask_pii(message.sender),
                delivered=delivered,
                planned=len(payloads),
            )
        return delivered


def get_reply_dispatcher(settings: Settings) -> ReplyDispatcher:
    """Factory function to get a ReplyDispatcher wired to WhatsApp."""
    return ReplyDispatcher(messaging=get_messaging_service(settings))
