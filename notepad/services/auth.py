"""Credential check."""

from __future__ import annotations

import hmac
from typing import TYPE_CHECKING

from notepad.exc import Unauthorized
from notepad.services.logs import get_logger

if TYPE_CHECKING:
    from notepad.settings import Settings

logger = get_logger(__name__)


def check_credentials(username: str, password: str, settings: Settings) -> bool:
    """
    Check a username and password against the configured pair.

    Both must match exactly.  The failure message is the same whichever field
    was wrong.  Nothing is stored: there is no session.

    Args:
        username: Submitted username
        password: Submitted password
        settings: Application settings holding the expected pair

    Returns:
        True if the credentials match

    Raises:
        Unauthorized: If either field does not match

    """
    username_ok = hmac.compare_digest(
        username.encode("utf-8"), settings.username.encode("utf-8")
    )
    password_ok = hmac.compare_digest(
        password.encode("utf-8"), settings.password.encode("utf-8")
    )
    if username_ok and password_ok:
        logger.info("auth.login_succeeded", username=username)
        return True
    logger.warning("auth.login_failed", username=username)
    raise Unauthorized
