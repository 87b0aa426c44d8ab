"""Incoming/outgoing WhatsApp Cloud API models.

Inbound models mirror the webhook envelope
(https://developers.facebook.com/docs/whatsapp/cloud-api/webhooks/reference/messages)
and ignore unknown fields so provider additions never break parsing.
Outbound models mirror the /messages request body.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from src.constants import WHATSAPP_MESSAGING_PRODUCT


class _InboundModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TextContent(_InboundModel):
    body: str = ""


class ListReply(_InboundModel):
    """Row the user tapped in a previously sent list menu."""

    id: str
    title: str | None = None
    description: str | None = None


class ButtonReply(_InboundModel):
    id: str
    title: str | None = None


class InteractiveContent(_InboundModel):
    type: str | None = None
    list_reply: ListReply | None = None
    button_reply: ButtonReply | None = None


class InboundMessage(_InboundModel):
    """A single user message from a webhook change."""

    id: str | None = None
    sender: str = Field(..., alias="from")
    timestamp: str | None = None
    type: str
    text: TextContent | None = None
    interactive: InteractiveContent | None = None

    @property
    def is_list_reply(self) -> bool:
        return (
            self.type == "interactive"
            and self.interactive is not None
            and self.interactive.type == "list_reply"
            and self.interactive.list_reply is not None
        )

    @property
    def is_text(self) -> bool:
        return self.type == "text"

    @property
    def selected_option_id(self) -> str | None:
        if not self.is_list_reply:
            return None
        return self.interactive.list_reply.id

    @property
    def text_body(self) -> str:
        return self.text.body if self.text else ""


def _first(items: Any) -> Any:
    if isinstance(items, list) and items:
        return items[0]
    return None


def _get(container: Any, key: str) -> Any:
    return container.get(key) if isinstance(container, dict) else None


class WebhookEvent(_InboundModel):
    """WhatsApp webhook root: { object: str, entry: [Entry] }.

    Entries are kept as raw JSON; only the one message that gets answered is
    validated, so a malformed sibling cannot block it.
    """

    object: str
    entry: list[Any] = Field(default_factory=list)

    def first_message(self) -> InboundMessage | None:
        """Return the first message of the first change of the first entry.

        Sibling entries, changes and messages are ignored.

        Raises:
            pydantic.ValidationError: The first message itself is malformed
        """
        change = _first(_get(_first(self.entry), "changes"))
        raw_message = _first(_get(_get(change, "value"), "messages"))
        if raw_message is None:
            return None
        return InboundMessage.model_validate(raw_message)


# =============================================================================
# Outbound payloads
# =============================================================================


class TextBody(BaseModel):
    body: str


class TextMessagePayload(BaseModel):
    """Plain-text message sent to a single recipient."""

    messaging_product: str = WHATSAPP_MESSAGING_PRODUCT
    to: str
    type: Literal["text"] = "text"
    text: TextBody


class InteractiveHeader(BaseModel):
    type: Literal["text"] = "text"
    text: str


class InteractiveBody(BaseModel):
    text: str


class ListRow(BaseModel):
    id: str
    title: str
    description: str | None = None


class ListSection(BaseModel):
    title: str
    rows: list[ListRow]


class ListAction(BaseModel):
    button: str
    sections: list[ListSection]


class InteractiveList(BaseModel):
    type: Literal["list"] = "list"
    header: InteractiveHeader | None = None
    body: InteractiveBody
    action: ListAction


class InteractiveListPayload(BaseModel):
    """Interactive list menu sent to a single recipient."""

    messaging_product: str = WHATSAPP_MESSAGING_PRODUCT
    to: str
    type: Literal["interactive"] = "interactive"
    interactive: InteractiveList


OutboundPayload = TextMessagePayload | InteractiveListPayload
