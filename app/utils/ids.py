import uuid

from app.utils.exceptions import InvalidInputException


def parse_id(raw: str, field: str = "id") -> uuid.UUID:
    """Turn a client-supplied identifier into a UUID, or raise InvalidInput."""
    try:
        return uuid.UUID(str(raw))
    except (ValueError, AttributeError, TypeError):
        raise InvalidInputException("Invalid ID", field=field)
