"""
Field lookup on parsed JSON-RPC payloads.

Nodes disagree on a few field names (``sha3Uncles`` / ``uncleHash``,
``input`` / ``data`` ...), so lookups take the accepted spellings in order of
preference. A JSON ``null`` counts as absent.
"""

from typing import Any, Callable, Mapping, Optional, Tuple, TypeVar

from .exceptions import MissingField

T = TypeVar("T")

Decoder = Callable[[Any, Optional[str]], T]


def lookup_field(raw: Mapping[str, Any], *names: str) -> Tuple[str, Any]:
    """
    Return the first of `names` present in `raw` together with its value, or
    the preferred name and `None` when none is.
    """
    for name in names:
        value = raw.get(name)
        if value is not None:
            return name, value
    return names[0], None


def has_field(raw: Mapping[str, Any], *names: str) -> bool:
    """
    Whether any of `names` is present in `raw` with a non-null value.
    """
    return lookup_field(raw, *names)[1] is not None


def require_field(raw: Mapping[str, Any], *names: str) -> Any:
    """
    Return the raw value of a mandatory field.
    """
    name, value = lookup_field(raw, *names)
    if value is None:
        raise MissingField("field is required", name)
    return value


def read_field(
    raw: Mapping[str, Any], decoder: Decoder[T], *names: str
) -> T:
    """
    Decode a mandatory field.
    """
    name, value = lookup_field(raw, *names)
    if value is None:
        raise MissingField("field is required", name)
    return decoder(value, name)


def read_optional_field(
    raw: Mapping[str, Any], decoder: Decoder[T], *names: str
) -> Optional[T]:
    """
    Decode a field that only some forks carry, returning `None` when absent.
    """
    name, value = lookup_field(raw, *names)
    if value is None:
        return None
    return decoder(value, name)
