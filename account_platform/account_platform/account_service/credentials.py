from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import AlreadyRegistered, InvalidPassword, MissingFields, NotRegistered, StorageError
from .models import User


def _require_credentials(name: str, password: str) -> None:
    if not name or not password:
        raise MissingFields()


def _find_user(name: str, db: Session):
    try:
        return db.query(User).filter(User.name == name).first()
    except SQLAlchemyError as e:
        raise StorageError(f"Failed to check if user '{name}' is registered: {e}") from e


def register(name: str, password: str, db: Session) -> None:
    """
    Create an account with the password stored as given.

    Raises:
        MissingFields: name or password is empty
        AlreadyRegistered: an account with this name exists, including when a
            concurrent registration inserted it first
        StorageError: any other database failure
    """
    _require_credentials(name, password)
    if _find_user(name, db) is not None:
        raise AlreadyRegistered()

    # a concurrent registration can still win between the check and the insert;
    # the UNIQUE constraint on users.name rejects the loser
    try:
        db.add(User(name=name, password=password))
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise AlreadyRegistered() from e
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to register user '{name}': {e}") from e


def verify(name: str, password: str, db: Session) -> int:
    """
    Check a name/password pair and return the account's user_id.

    Raises:
        MissingFields: name or password is empty
        NotRegistered: no account with this name
        InvalidPassword: the password does not match
        StorageError: database failure
    """
    _require_credentials(name, password)
    user = _find_user(name, db)
    if user is None:
        raise NotRegistered()
    if password != user.password:
        raise InvalidPassword()
    return user.user_id
