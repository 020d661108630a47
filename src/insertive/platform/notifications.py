"""Desktop notifications via notify-send."""

from __future__ import annotations

import logging
import shutil
import subprocess

from insertive.constants import APP_NAME

logger = logging.getLogger(__name__)


def notifications_available() -> bool:
    return shutil.which("notify-send") is not None


def notify(
    title: str,
    body: str = "",
    urgency: str = "normal",
    timeout_ms: int = 5000,
) -> bool:
    """Send a desktop notification using notify-send.

    Args:
        title: Notification title.
        body: Notification body text.
        urgency: "low", "normal", or "critical".
        timeout_ms: Time in milliseconds before auto-dismiss.

    Returns:
        True if notify-send ran successfully.
    """
    cmd = [
        "notify-send",
        "--app-name", APP_NAME,
        "--urgency", urgency,
        "--expire-time", str(timeout_ms),
        title,
    ]
    if body:
        cmd.append(body)

    if not notifications_available():
        logger.debug("notify-send not installed, skipping notification")
        return False

    try:
        result = subprocess.run(cmd, capture_output=True, timeout=5)
    except FileNotFoundError:
        logger.debug("notify-send not found, skipping notification")
        return False
    except (OSError, subprocess.TimeoutExpired):
        logger.debug("Failed to send notification", exc_info=True)
        return False
    return result.returncode == 0
