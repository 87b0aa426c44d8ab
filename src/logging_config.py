"""Centralized logging configuration with Pydantic Logfire integration."""

import logging
from typing import Any

import logfire
from fastapi import FastAPI

from src.config import Settings


def setup_logfire(app: FastAPI, settings: Settings) -> None:
    """
    Initialize and configure Pydantic Logfire for observability.

    Sets up:
    - FastAPI instrumentation (request/response tracing)
    - httpx instrumentation (outbound Cloud API calls)
    - Pydantic instrumentation (webhook payload validation)
    - Python logging for module loggers, console format when running locally
    """
    logfire_config: dict[str, Any] = {
        "environment": settings.env,
        # Without a token, logs stay local instead of prompting for a project
        "send_to_logfire": "if-token-present",
    }

    if settings.logfire_token:
        logfire_config["token"] = settings.logfire_token

    logfire.configure(**logfire_config)

    logfire.instrument_fastapi(app)
    logfire.instrument_httpx()
    logfire.instrument_pydantic()

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    if settings.env == "local":
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        # Logfire handles structured formatting
        logging.basicConfig(level=log_level, format="%(message)s")


def mask_pii(value: str | None, mask_char: str = "*") -> str:
    """
    Mask potentially sensitive data in logs.

    WhatsApp user IDs are phone numbers, so they go through here before
    being attached to log records.

    Args:
        value: Value to mask
        mask_char: Character to use for masking

    Returns:
        Masked string
    """
    if not value:
        return ""

    if len(value) <= 4:
        return mask_char * len(value)

    # Show first 2 and last 2 characters, mask the rest
    return f"{value[:2]}{mask_char * (len(value) - 4)}{value[-2:]}"
