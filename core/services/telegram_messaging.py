"""
Telegram Bot API sender.

All hub notifications leave through send_telegram_message. Timeouts,
connection errors, 429 and 5xx are retried with exponential backoff;
400/403/404 mean the chat or payload is wrong and are not retried.
"""

import asyncio
import os

import httpx

from core.logging import get_logger

logger = get_logger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org/bot{token}/sendMessage"
MAX_MESSAGE_LENGTH = 4096
PERMANENT_ERROR_CODES = {400, 403, 404}
BACKOFF_BASE_SECONDS = 0.5

TELEGRAM_TOKEN = os.environ.get("TELEGRAM_TOKEN", "")
TELEGRAM_KITCHEN_BOT_TOKEN = os.environ.get("TELEGRAM_KITCHEN_BOT_TOKEN", "")


def _backoff(attempt: int) -> float:
    return BACKOFF_BASE_SECONDS * (2 ** attempt)


def _error_description(response: httpx.Response) -> str:
    if not response.text:
        return "No response body"
    try:
        description = response.json().get("description")
    except ValueError:
        description = None
    return description or response.text[:500]


def _convert_keyboard_to_dict(keyboard) -> dict | None:
    """reply_markup payload from an aiogram markup or a prepared dict."""
    if isinstance(keyboard, dict):
        return dict(keyboard)

    if hasattr(keyboard, "model_dump"):
        try:
            return keyboard.model_dump(exclude_none=True) or None
        except Exception:
            logger.exception("Could not serialize keyboard")
            return None

    logger.error(f"Unsupported keyboard type: {type(keyboard).__name__}")
    return None


def _truncate_message(text: str, max_length: int = MAX_MESSAGE_LENGTH) -> str:
    if len(text) <= max_length:
        return text
    logger.warning(f"Message of {len(text)} chars cut to the {max_length}-char limit")
    return text[:max_length - 3] + "..."


async def _post_with_retry(url: str, payload: dict, retries: int, timeout: float) -> bool:
    chat_id = payload["chat_id"]
    failure = None

    for attempt in range(retries + 1):
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(url, json=payload, timeout=timeout)
        except httpx.TimeoutException:
            failure = "timeout"
            logger.warning(f"Telegram timeout for chat {chat_id} (attempt {attempt + 1}/{retries + 1})")
        except httpx.HTTPError as e:
            failure = f"connection error: {e}"
            logger.warning(f"Telegram connection error for chat {chat_id}: {e}")
        else:
            if response.status_code == 200:
                logger.debug(f"Telegram message delivered to chat {chat_id}")
                return True

            failure = f"HTTP {response.status_code}"
            logger.warning(
                f"Telegram rejected message for chat {chat_id}: "
                f"{failure} {_error_description(response)}"
            )
            if response.status_code in PERMANENT_ERROR_CODES:
                return False

        if attempt < retries:
            await asyncio.sleep(_backoff(attempt))

    logger.error(f"Giving up on chat {chat_id} after {retries + 1} attempts ({failure})")
    return False


async def send_telegram_message(
    chat_id: int,
    text: str,
    keyboard=None,
    parse_mode: str | None = "HTML",
    bot_token: str | None = None,
    retries: int = 2,
    timeout: float = 10.0,
) -> bool:
    """
    Send one message to a chat.

    Args:
        chat_id: Target chat (user or group)
        text: Message body, HTML unless parse_mode says otherwise
        keyboard: aiogram InlineKeyboardMarkup or a reply_markup dict
        parse_mode: "HTML", "Markdown" or None
        bot_token: Token of the sending bot; TELEGRAM_TOKEN when omitted
        retries: Extra attempts after the first one
        timeout: Per-request timeout in seconds

    Returns:
        True when Telegram accepted the message. Never raises for
        delivery problems.
    """
    token = bot_token or TELEGRAM_TOKEN
    if not token:
        logger.warning(f"No bot token configured, message to chat {chat_id} dropped")
        return False

    payload = {"chat_id": chat_id, "text": _truncate_message(text)}
    if parse_mode:
        payload["parse_mode"] = parse_mode

    if keyboard is not None:
        reply_markup = _convert_keyboard_to_dict(keyboard)
        if reply_markup is None:
            return False
        payload["reply_markup"] = reply_markup

    return await _post_with_retry(TELEGRAM_API_URL.format(token=token), payload, retries, timeout)


async def send_via_admin_bot(chat_id: int, text: str, keyboard=None) -> bool:
    """Post to the admin chat through the main hub bot."""
    return await send_telegram_message(chat_id, text, keyboard=keyboard, bot_token=TELEGRAM_TOKEN)


async def send_via_kitchen_bot(chat_id: int, text: str, keyboard=None) -> bool:
    """Post through the kitchen bot; the main bot stands in when it has no token."""
    return await send_telegram_message(
        chat_id,
        text,
        keyboard=keyboard,
        bot_token=TELEGRAM_KITCHEN_BOT_TOKEN or TELEGRAM_TOKEN,
    )
