import asyncio

import aiohttp
from slack_sdk.errors import SlackApiError, SlackClientError


# API error codes that mean the token itself is unusable, not that one channel refused
AUTH_ERROR_CODES = frozenset({
    "invalid_auth",
    "not_authed",
    "account_inactive",
    "token_revoked",
    "token_expired",
    "missing_scope",
    "no_permission",
    "not_allowed_token_type",
})

# Anything the Slack client or the HTTP transport can raise for a single call
SLACK_CALL_ERRORS = (SlackClientError, aiohttp.ClientError, asyncio.TimeoutError)


class AutoArchiverError(Exception):
    """Base class for errors that abort an archiver run"""


class DirectoryError(AutoArchiverError):
    """The channel directory (or the bot identity) could not be read"""


class ReconciliationError(AutoArchiverError):
    """Joining channels failed in a way that affects every channel"""


def slack_error_code(error: Exception) -> str:
    """Return the Slack API error code carried by an exception, or an empty string"""
    if isinstance(error, SlackApiError) and error.response is not None:
        return error.response.get("error") or ""
    return ""


def is_unrecoverable(error: Exception) -> bool:
    """Transport failures and auth failures can't be fixed by skipping a channel"""
    if isinstance(error, SlackApiError):
        return slack_error_code(error) in AUTH_ERROR_CODES
    return isinstance(error, SLACK_CALL_ERRORS)
