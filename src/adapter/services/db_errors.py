from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.app.services.unit_of_work import DuplicateKeyError, PersistenceError


@contextmanager
def translate_db_errors():
    """Re-raise SQLAlchemy errors as application-level PersistenceError"""
    try:
        yield
    except IntegrityError as e:
        raise DuplicateKeyError(str(e.orig)) from e
    except SQLAlchemyError as e:
        raise PersistenceError(str(e)) from e
