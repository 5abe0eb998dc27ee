from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import InvalidToken, StorageError
from .models import User, UserSession
from .schemas import Profile


def get_profile(token: str, db: Session) -> Profile:
    """
    Name and password of the account owning token.

    Raises:
        InvalidToken: no session matches token
        StorageError: database failure
    """
    try:
        row = (
            db.query(User.name, User.password)
            .join(UserSession, UserSession.user_id == User.user_id)
            .filter(UserSession.token == token)
            .first()
        )
    except SQLAlchemyError as e:
        raise StorageError(f"Failed to query user data: {e}") from e
    if row is None:
        raise InvalidToken()
    return Profile(name=row.name, password=row.password)
