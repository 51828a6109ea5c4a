"""Shared fixtures: an in-memory Slack workspace standing in for the Web API."""

from datetime import datetime, timedelta, timezone

import pytest
from slack_sdk.errors import SlackApiError

from core.config import Settings
from models.data_models import Channel, Identity, Message


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def days_ago(days: float) -> str:
    """Slack-style ts for a message posted `days` before NOW"""
    return f"{(NOW - timedelta(days=days)).timestamp():.6f}"


def api_error(code: str) -> SlackApiError:
    return SlackApiError(message=f"The request to the Slack API failed. ({code})", response={"ok": False, "error": code})


class FakeGateway:
    """ChannelGateway over in-memory channels, recording every mutating call"""

    def __init__(self, channels=(), history=None, page_size=2):
        self.channels = {c.id: c for c in channels}
        self.history = history or {}
        self.page_size = page_size
        self.identity = Identity(user_id="UBOT", team="Acme")

        self.join_calls = []
        self.archive_calls = []
        self.history_calls = []
        self.list_calls = 0

        self.identify_error = None
        self.list_error = None
        self.join_errors = {}
        self.history_errors = {}
        self.archive_errors = {}

    async def identify(self):
        if self.identify_error:
            raise self.identify_error
        return self.identity

    async def iter_channels(self):
        listing = [c for c in self.channels.values() if not c.is_archived]
        for start in range(0, max(len(listing), 1), self.page_size):
            self.list_calls += 1
            if self.list_error:
                raise self.list_error
            for channel in listing[start:start + self.page_size]:
                yield channel

    async def join(self, channel_id):
        self.join_calls.append(channel_id)
        if channel_id in self.join_errors:
            raise self.join_errors[channel_id]
        self.channels[channel_id] = self.channels[channel_id].as_member()

    async def iter_history(self, channel_id, oldest):
        self.history_calls.append((channel_id, oldest))
        if channel_id in self.history_errors:
            raise self.history_errors[channel_id]
        for message in self.history.get(channel_id, []):
            if oldest is None or float(message.ts) >= float(oldest):
                yield message

    async def archive(self, channel_id):
        self.archive_calls.append(channel_id)
        if channel_id in self.archive_errors:
            raise self.archive_errors[channel_id]
        channel = self.channels[channel_id]
        self.channels[channel_id] = Channel(
            id=channel.id,
            name=channel.name,
            is_member=channel.is_member,
            is_archived=True,
            is_private=channel.is_private,
        )


def human(days: float, text="hello") -> Message:
    return Message(ts=days_ago(days), text=text, subtype="")


def bot(days: float, text="beep") -> Message:
    return Message(ts=days_ago(days), text=text, subtype="bot_message")


def system(days: float, subtype="channel_join") -> Message:
    return Message(ts=days_ago(days), text="<@U1> has joined the channel", subtype=subtype)


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def settings():
    return Settings(_env_file=None, APP_TOKEN="xapp-1", BOT_TOKEN="xoxb-1", ARCHIVE_THRESHOLD=30)


@pytest.fixture
def clock():
    return lambda: NOW
