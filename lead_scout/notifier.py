# lead_scout/notifier.py
import logging
import re
from datetime import datetime
from typing import Optional, Protocol

import telegram
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.helpers import escape_markdown

from .models import Lead

logger = logging.getLogger('LeadScout.Notifier')

EXCERPT_LIMIT = 200
NO_CONTACT = 'N/A'


class Notifier(Protocol):
    """Delivers one message and reports whether it went through. Never raises for send failures."""

    async def send(self, message: str) -> bool:
        ...


def excerpt(text: str, limit: int = EXCERPT_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + '...'


def format_lead_message(lead: Lead, found_at: Optional[datetime] = None) -> str:
    """Render a lead as a Telegram Markdown message."""
    found_at = found_at or lead.created_at
    phones = ', '.join(lead.phones) if lead.phones else NO_CONTACT
    emails = ', '.join(lead.emails) if lead.emails else NO_CONTACT
    tag = re.sub(r"[\s()]", "", lead.source)
    return (
        f"*New Lead: {escape_markdown(lead.source)}*\n\n"
        f"📝 *Description:* {escape_markdown(excerpt(lead.text))}\n\n"
        f"📞 *Contact:* {escape_markdown(phones)}\n"
        f"📧 *Email:* {escape_markdown(emails)}\n"
        f"🔗 *Link:* [View Original]({lead.source_url})\n"
        f"📅 *Found:* {found_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}\n\n"
        f"#{escape_markdown(tag)} #CyberServices"
    )


class TelegramNotifier:
    """Sends messages to one chat through the Telegram Bot API."""

    def __init__(self, token: str, chat_id: str, bot: Optional[telegram.Bot] = None):
        self.chat_id = chat_id
        self.bot = bot or (telegram.Bot(token=token) if token else None)

    async def send(self, message: str) -> bool:
        if not self.bot or not self.chat_id:
            logger.warning("Telegram credentials missing. Skipping notification.")
            return False
        try:
            # Directly await the async send_message (python-telegram-bot v20+)
            await self.bot.send_message(
                chat_id=self.chat_id,
                text=message,
                parse_mode=ParseMode.MARKDOWN,
            )
            logger.info("📱 Telegram message sent.")
            return True
        except TelegramError as e:
            logger.error(f"Error sending Telegram message: {e}")
            return False
