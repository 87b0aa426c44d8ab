"""Application-wide constants.

This module centralizes the WhatsApp Cloud API constants and the defaults
used by configuration, so there is a single source of truth for them.
"""

# =============================================================================
# WhatsApp Cloud API
# =============================================================================

# Value of the top-level "object" field on every WhatsApp webhook event
WHATSAPP_BUSINESS_ACCOUNT_OBJECT = "whatsapp_business_account"

# Value of "messaging_product" on outbound message payloads
WHATSAPP_MESSAGING_PRODUCT = "whatsapp"

# Graph API host and version used for outbound messages
GRAPH_API_BASE_URL = "https://graph.facebook.com"
GRAPH_API_VERSION = "v19.0"

# =============================================================================
# Webhook Verification
# =============================================================================

# hub.mode value sent by Meta during the subscription handshake
WEBHOOK_SUBSCRIBE_MODE = "subscribe"

# =============================================================================
# HTTP Timeout Configuration
# =============================================================================

# Timeout for WhatsApp Cloud API calls (seconds)
WHATSAPP_API_TIMEOUT_SECONDS = 10.0

# Maximum characters of a provider error body kept in logs
MAX_LOGGED_RESPONSE_BODY_CHARS = 500

# =============================================================================
# Server
# =============================================================================

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
