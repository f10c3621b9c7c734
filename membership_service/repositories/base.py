# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Helpers shared by the SQLAlchemy repositories."""
import uuid
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from membership_service.core.errors import MalformedIdentifier, StorageUnavailable
from membership_service.core.logging import get_logger

logger = get_logger(__name__)


def new_identifier() -> str:
    return str(uuid.uuid4())


def parse_identifier(value: str, kind: str = "member") -> str:
    """Return the canonical form of ``value`` or raise MalformedIdentifier."""
    try:
        return str(uuid.UUID(str(value)))
    except (ValueError, AttributeError, TypeError):
        raise MalformedIdentifier(f"Invalid {kind} ID")


@contextmanager
def storage_errors(action: str, on_conflict) -> Iterator[None]:
    """Translate driver failures into the typed taxonomy.

    ``on_conflict`` builds the exception raised when a unique constraint fires.
    """
    try:
        yield
    except IntegrityError as exc:
        raise on_conflict() from exc
    except SQLAlchemyError as exc:
        logger.error("Storage failure during %s: %s", action, exc)
        raise StorageUnavailable(f"Storage unavailable during {action}") from exc
