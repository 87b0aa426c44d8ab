"""Static FAQ answers and the selection menu.

Everything here is read-only and shared across requests. Payload builders
return a fresh object on every call.
"""

from types import MappingProxyType

from src.models.whatsapp import (
    InteractiveBody,
    InteractiveHeader,
    InteractiveList,
    InteractiveListPayload,
    ListAction,
    ListRow,
    ListSection,
    TextBody,
    TextMessagePayload,
)

FAQ_TABLE = MappingProxyType(
    {
        "1": "✅ Timings: Our business hours are Monday to Friday, 9:00 AM to 5:00 PM.",
        "2": "💰 Prices: Our basic membership starts at $20/hour. Please visit our website for full details on package pricing.",
        "3": "🗓️ Booking: To book a meeting room, please visit the booking section on our website (Vantage.com/booking) or contact our desk team.",
        "4": "📍 Location: We are located at 123 Vantage Tower, Business District, City Center.",
    }
)

DEFAULT_REPLY = (
    "I did not recognize that option. "
    "Please reply with a number from the menu (1, 2, 3, or 4)."
)

MENU_HEADER = "Hello👋 Thank you for contacting Daftarkhwan North."
MENU_BODY = "Please select one of the options below so we can guide you better:"
MENU_BUTTON = "Select an Option"
MENU_SECTION_TITLE = "Vantage FAQs"

# Row "5" has no FAQ entry and resolves to DEFAULT_REPLY
MENU_ROWS = (
    ("1", "1 – Service & Pricing Information"),
    ("2", "2 – Book a Visit / Appointment"),
    ("3", "3 – Report an Issue or Submit a Query"),
    ("4", "4 – Membership Details & Queries"),
    ("5", "5 – Talk to a Representative (Next Business Day)"),
)


def lookup_reply(option_id: str | None) -> str | None:
    """Return the canned answer for an option id, or None if unknown."""
    if option_id is None:
        return None
    return FAQ_TABLE.get(option_id)


def build_text_payload(recipient_id: str, text: str) -> TextMessagePayload:
    return TextMessagePayload(to=recipient_id, text=TextBody(body=text))


def build_menu_payload(recipient_id: str) -> InteractiveListPayload:
    return InteractiveListPayload(
        to=recipient_id,
        interactive=InteractiveList(
            header=InteractiveHeader(text=MENU_HEADER),
            body=InteractiveBody(text=MENU_BODY),
            action=ListAction(
                button=MENU_BUTTON,
                sections=[
                    ListSection(
                        title=MENU_SECTION_TITLE,
                        rows=[ListRow(id=row_id, title=title) for row_id, title in MENU_ROWS],
                    )
                ],
            ),
        ),
    )
