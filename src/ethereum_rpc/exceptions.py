"""
Errors raised while translating between JSON-RPC payloads and the canonical
chain model.

Every error is local to one translation call and is raised before any
canonical value is constructed, so callers never observe a partially
populated block, transaction or receipt.
"""

from typing import Optional


class TranslationError(Exception):
    """
    Base class for all translation failures.
    """

    field: Optional[str]
    """
    Name of the wire field that could not be translated, when known.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        if field is not None:
            message = f"{field}: {message}"
        super().__init__(message)
        self.field = field


class MalformedQuantity(TranslationError):
    """
    A quantity does not parse as a non-negative integer, or does not fit the
    integer type of its field.
    """


class MalformedBytes(TranslationError):
    """
    A byte string has an odd digit count, contains non-hex characters, or has
    the wrong length for a fixed-size field.
    """


class MissingField(TranslationError):
    """
    A field that every payload of its kind must carry is absent.
    """


class UnsupportedReceiptFormat(TranslationError):
    """
    A receipt carries neither a state root nor a usable status.
    """


class UnsupportedBlockFormat(TranslationError):
    """
    A block lists its transactions as hashes where full transaction objects
    are required.
    """


class InconsistentTransactionShape(TranslationError):
    """
    The fee fields of a transaction do not describe exactly one transaction
    variant.
    """
