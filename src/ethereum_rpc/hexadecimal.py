"""
Utility Functions For Hexadecimal Strings
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Codecs for the two scalar encodings of the JSON-RPC wire format:

- *quantities*, non-negative integers written as ``0x``-prefixed hex with no
  leading zeros (``0x0`` for zero);
- *data*, byte strings written as ``0x``-prefixed hex with an even number of
  digits.

Decoders accept the already-parsed JSON value and the name of the field it
came from, and raise :class:`~ethereum_rpc.exceptions.MalformedQuantity` or
:class:`~ethereum_rpc.exceptions.MalformedBytes` instead of guessing.
Quantities are decoded into arbitrary-precision `Uint` values, since gas,
value and difficulty routinely exceed 64 bits.
"""
import re
from typing import Any, Optional, SupportsInt, Type, TypeVar

from ethereum_types.bytes import Bytes, Bytes8, FixedBytes
from ethereum_types.numeric import U64, U256, Uint

from ethereum_canonical.crypto.hash import Hash32
from ethereum_canonical.fork_types import Address, Bloom, Root

from .exceptions import MalformedBytes, MalformedQuantity

B = TypeVar("B", bound=FixedBytes)

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")
_DECIMAL_DIGITS = re.compile(r"[0-9]+")


def has_hex_prefix(hex_string: str) -> bool:
    """
    Check if a hex string starts with hex prefix (0x).
    """
    return hex_string.startswith("0x")


def remove_hex_prefix(hex_string: str) -> str:
    """
    Remove 0x prefix from a hex string if present. This function returns the
    passed hex string if it isn't prefixed with 0x.
    """
    if has_hex_prefix(hex_string):
        return hex_string[len("0x") :]

    return hex_string


def hex_to_uint(value: Any, field: Optional[str] = None) -> Uint:
    """
    Convert a wire quantity to Uint.

    Hex strings must carry the ``0x`` prefix. Unprefixed strings are read as
    decimal, and JSON integers are taken as they are. Leading zeros are
    tolerated on input.

    Parameters
    ----------
    value :
        The quantity as found in the parsed payload.
    field :
        Name of the wire field, used in error messages.

    Returns
    -------
    converted : `Uint`
        The unsigned integer obtained from the given quantity.
    """
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise MalformedQuantity(
            f"expected a quantity, got {type(value).__name__}", field
        )

    if isinstance(value, int):
        if value < 0:
            raise MalformedQuantity(f"negative quantity {value}", field)
        return Uint(value)

    if has_hex_prefix(value):
        digits = remove_hex_prefix(value)
        if not digits or not _HEX_DIGITS.fullmatch(digits):
            raise MalformedQuantity(f"invalid hex quantity {value!r}", field)
        return Uint(int(digits, 16))

    if not _DECIMAL_DIGITS.fullmatch(value):
        raise MalformedQuantity(f"invalid quantity {value!r}", field)
    return Uint(int(value, 10))


def hex_to_u64(value: Any, field: Optional[str] = None) -> U64:
    """
    Convert a wire quantity to U64.
    """
    number = hex_to_uint(value, field)
    try:
        return U64(number)
    except OverflowError as e:
        raise MalformedQuantity(
            f"{number} does not fit in 64 bits", field
        ) from e


def hex_to_u256(value: Any, field: Optional[str] = None) -> U256:
    """
    Convert a wire quantity to U256.
    """
    number = hex_to_uint(value, field)
    try:
        return U256(number)
    except OverflowError as e:
        raise MalformedQuantity(
            f"{number} does not fit in 256 bits", field
        ) from e


def uint_to_hex(value: SupportsInt) -> str:
    """
    Encode an integer as a wire quantity: ``0x`` followed by the minimal
    number of lowercase hex digits.

    >>> uint_to_hex(0)
    '0x0'
    >>> uint_to_hex(255)
    '0xff'
    """
    number = int(value)
    if number < 0:
        raise MalformedQuantity(f"negative quantity {number}")
    return hex(number)


def hex_to_bytes(value: Any, field: Optional[str] = None) -> Bytes:
    """
    Convert hex string to bytes.

    Parameters
    ----------
    value :
        The hexadecimal string to be converted to bytes.
    field :
        Name of the wire field, used in error messages.

    Returns
    -------
    byte_stream : `bytes`
        Byte stream corresponding to the given hexadecimal string.
    """
    if not isinstance(value, str):
        raise MalformedBytes(
            f"expected a hex string, got {type(value).__name__}", field
        )

    digits = remove_hex_prefix(value)
    if not _HEX_DIGITS.fullmatch(digits):
        raise MalformedBytes(f"invalid hex data {value!r}", field)
    if len(digits) % 2 != 0:
        raise MalformedBytes(
            f"odd number of hex digits ({len(digits)})", field
        )

    return bytes.fromhex(digits)


def hex_to_fixed_bytes(
    value: Any, cls: Type[B], field: Optional[str] = None
) -> B:
    """
    Convert hex string to a fixed-size byte type, rejecting any other length.
    """
    data = hex_to_bytes(value, field)
    if len(data) != cls.LENGTH:
        raise MalformedBytes(
            f"expected {cls.LENGTH} bytes but got {len(data)}", field
        )
    return cls(data)


def hex_to_bytes8(value: Any, field: Optional[str] = None) -> Bytes8:
    """
    Convert hex string to 8 bytes.
    """
    return hex_to_fixed_bytes(value, Bytes8, field)


def hex_to_hash(value: Any, field: Optional[str] = None) -> Hash32:
    """
    Convert hex string to hash32 (32 bytes).
    """
    return hex_to_fixed_bytes(value, Hash32, field)


def hex_to_root(value: Any, field: Optional[str] = None) -> Root:
    """
    Convert hex string to trie root.
    """
    return hex_to_fixed_bytes(value, Root, field)


def hex_to_bloom(value: Any, field: Optional[str] = None) -> Bloom:
    """
    Convert hex string to bloom.
    """
    return hex_to_fixed_bytes(value, Bloom, field)


def hex_to_address(value: Any, field: Optional[str] = None) -> Address:
    """
    Convert hex string to Address (20 bytes).

    Shorter byte strings are left-padded with zero bytes. Longer ones are an
    error and are never truncated.

    Parameters
    ----------
    value :
        The hexadecimal string to be converted to Address.
    field :
        Name of the wire field, used in error messages.

    Returns
    -------
    address : `Address`
        The address obtained from the given hexadecimal string.
    """
    data = hex_to_bytes(value, field)
    if len(data) > Address.LENGTH:
        raise MalformedBytes(
            f"address is {len(data)} bytes, expected {Address.LENGTH}", field
        )
    return Address(data.rjust(Address.LENGTH, b"\x00"))


def bytes_to_hex(value: bytes) -> str:
    """
    Encode a byte string as wire data.
    """
    return "0x" + bytes(value).hex()
