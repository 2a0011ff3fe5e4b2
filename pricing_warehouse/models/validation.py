"""Pydantic validation of models against decoded JSON."""

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from pricing_warehouse.exceptions import MalformedInputError

T = TypeVar("T")


def _location(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location as ``policies[3].issue_date``."""
    text = ""
    for part in loc:
        if isinstance(part, int):
            text += f"[{part}]"
        else:
            text += f".{part}" if text else str(part)
    return text or "document"


def describe_validation_error(error: ValidationError) -> str:
    """First validation problem with its location, plus a count of the rest."""
    errors = error.errors()
    first = errors[0]
    message = f"{_location(first['loc'])}: {first['msg']}"
    if len(errors) > 1:
        message += f" (and {len(errors) - 1} more)"
    return message


@lru_cache(maxsize=None)
def _adapter(model: type) -> TypeAdapter:
    return TypeAdapter(model)


def validate_as(model: type[T], data: Any) -> T:
    """Validate ``data`` as an instance of the dataclass ``model``.

    Raises
    ------
    MalformedInputError
        If validation fails; the message names the offending field.
    """
    try:
        return _adapter(model).validate_python(data)
    except ValidationError as e:
        raise MalformedInputError(f"{model.__name__}: {describe_validation_error(e)}") from e
