"""
Error types raised by the canonical chain model.
"""


class EthereumException(Exception):
    """
    Base class for all exceptions _expected_ to be thrown during normal
    operation.
    """


class InvalidTransaction(EthereumException):
    """
    Thrown when a transaction is found to be invalid.
    """


class InvalidSignatureError(InvalidTransaction):
    """
    Thrown when a transaction has an invalid signature.
    """

