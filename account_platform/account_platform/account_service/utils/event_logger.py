"""
Event logger utility for account events.
"""
from datetime import datetime
from typing import Optional
from fastapi import Request
import sys
import logging
import os

from ..config import settings

# Configure stdout logging, plus a file under LOG_DIR when one is configured
handlers = [logging.StreamHandler(sys.stdout)]

if settings.LOG_DIR:
    try:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        handlers.append(logging.FileHandler(os.path.join(settings.LOG_DIR, "account_events.log")))
    except OSError as e:
        print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s:%(message)s",
    handlers=handlers
)

logger = logging.getLogger(__name__)


ALLOWED_EVENT_TYPES = {
    "register_success",
    "register_conflict",
    "auth_success",
    "auth_failure",
    "deauth",
    "profile_denied",
}


def client_ip(request: Request) -> Optional[str]:
    """Client address of the request, falling back to the first X-Forwarded-For entry."""
    if request.client and request.client.host:
        return request.client.host
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        # X-Forwarded-For can contain multiple IPs, take the first one
        return forwarded.split(",")[0].strip()
    return None


def log_account_event(event_type: str, name: Optional[str], request: Request, **details) -> None:
    """
    Write an account event to the service log.

    Args:
        event_type: One of ALLOWED_EVENT_TYPES
        name: Account name the event concerns, if known
        request: FastAPI Request object
        **details: Extra key=value pairs appended to the log line

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    extra = "".join(f" {key}={value}" for key, value in sorted(details.items()))
    logger.info(
        "ACCOUNT %s name=%s ip=%s timestamp=%s%s",
        event_type, name, client_ip(request), datetime.utcnow().isoformat(), extra
    )
