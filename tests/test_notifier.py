from datetime import datetime, timezone

import pytest
from telegram.error import TelegramError

from lead_scout.models import Lead
from lead_scout.notifier import TelegramNotifier, excerpt, format_lead_message


def _lead(**overrides):
    params = dict(
        id="abc",
        source="X (Twitter)",
        text="Cyber services available",
        source_url="https://twitter.com/x/status/1",
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )
    params.update(overrides)
    return Lead(**params)


def test_message_contains_lead_details():
    message = format_lead_message(
        _lead(phones=["0712345678"], emails=["me@x.co"]),
        found_at=datetime(2026, 1, 2, 9, 30),
    )
    assert message.startswith("*New Lead: X (Twitter)*")
    assert "0712345678" in message
    assert "me@x.co" in message
    assert "[View Original](https://twitter.com/x/status/1)" in message
    assert "2026-01-02 09:30:00" in message
    assert message.endswith("#XTwitter #CyberServices")


def test_missing_contacts_are_marked():
    message = format_lead_message(_lead())
    assert "*Contact:* N/A" in message
    assert "*Email:* N/A" in message


def test_long_text_is_truncated_with_ellipsis():
    assert excerpt("a" * 250) == "a" * 200 + "..."
    assert excerpt("short") == "short"
    assert "a" * 201 not in format_lead_message(_lead(text="a" * 250))


def test_markdown_in_text_is_escaped():
    message = format_lead_message(_lead(text="kra_pin *urgent*"))
    assert r"kra\_pin \*urgent\*" in message


class FakeBot:
    def __init__(self, error=None):
        self.error = error
        self.sent = []

    async def send_message(self, **kwargs):
        if self.error:
            raise self.error
        self.sent.append(kwargs)


@pytest.mark.asyncio
async def test_telegram_notifier_sends_markdown():
    bot = FakeBot()
    notifier = TelegramNotifier(token="t", chat_id="42", bot=bot)

    assert await notifier.send("hello") is True
    assert bot.sent[0]["chat_id"] == "42"
    assert bot.sent[0]["text"] == "hello"
    assert bot.sent[0]["parse_mode"] == "Markdown"
    assert "disable_web_page_preview" not in bot.sent[0]


@pytest.mark.asyncio
async def test_telegram_errors_are_reported_not_raised():
    notifier = TelegramNotifier(token="t", chat_id="42", bot=FakeBot(error=TelegramError("flood control")))
    assert await notifier.send("hello") is False


@pytest.mark.asyncio
async def test_missing_credentials_skip_send():
    assert await TelegramNotifier(token="", chat_id="").send("hello") is False


def test_found_time_defaults_to_lead_creation_time_in_utc():
    message = format_lead_message(_lead(created_at=datetime(2026, 3, 4, 5, 6, 7, tzinfo=timezone.utc)))
    assert "*Found:* 2026-03-04 05:06:07 UTC" in message
