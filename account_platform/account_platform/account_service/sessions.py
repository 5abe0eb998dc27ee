import re
import secrets
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import InvalidToken, MalformedToken, StorageError
from .models import UserSession

SESSION_COOKIE = "sessionToken"
TOKEN_BYTES = 32
TOKEN_LENGTH = TOKEN_BYTES * 2

_TOKEN_PATTERN = re.compile(r"[0-9a-f]{%d}" % TOKEN_LENGTH)


def generate_token() -> str:
    """32 bytes from the operating system CSPRNG as 64 lowercase hex characters."""
    try:
        return secrets.token_hex(TOKEN_BYTES)
    except (OSError, NotImplementedError) as e:
        raise StorageError(f"Secure random source unavailable: {e}") from e


def validate_token(raw: Optional[str]) -> str:
    """Reject missing or malformed tokens before they reach the store."""
    if raw is None:
        raise MalformedToken("Cookie with access token must be supplied")
    if len(raw) != TOKEN_LENGTH:
        raise MalformedToken("Token length is invalid")
    if not _TOKEN_PATTERN.fullmatch(raw):
        raise MalformedToken()
    return raw


def issue(user_id: int, db: Session) -> str:
    """Mint a token for user_id, persist it and return it."""
    token = generate_token()
    try:
        db.add(UserSession(user_id=user_id, token=token))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to store access token for user_id={user_id}: {e}") from e
    return token


def revoke(token: str, db: Session) -> None:
    """Delete the session for token. Unknown tokens are not an error."""
    try:
        db.query(UserSession).filter(UserSession.token == token).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to delete access token: {e}") from e


def resolve_user(token: str, db: Session) -> int:
    try:
        session = db.query(UserSession).filter(UserSession.token == token).first()
    except SQLAlchemyError as e:
        raise StorageError(f"Failed to look up access token: {e}") from e
    if session is None:
        raise InvalidToken()
    return session.user_id
