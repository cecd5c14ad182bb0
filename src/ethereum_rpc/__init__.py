"""
Ethereum JSON-RPC Translation
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Converts between the JSON-RPC representation of blocks, transactions and
receipts served by full nodes and the canonical model in
:mod:`ethereum_canonical`.

Every translator is a pure function of its input: payloads arrive already
parsed from JSON, canonical values are returned to the caller, and nothing is
fetched, cached or validated against consensus rules along the way.
"""

from .block import block_to_json, json_to_block
from .config import DEFAULT_CONFIG, TranslatorConfig
from .exceptions import (
    InconsistentTransactionShape,
    MalformedBytes,
    MalformedQuantity,
    MissingField,
    TranslationError,
    UnsupportedBlockFormat,
    UnsupportedReceiptFormat,
)
from .header import json_to_header
from .receipt import json_to_receipt
from .transaction import json_to_transaction, transaction_to_json
from .types import RPCBlock, RPCTransaction, to_json

__version__ = "0.1.0"

__all__ = (
    "DEFAULT_CONFIG",
    "InconsistentTransactionShape",
    "MalformedBytes",
    "MalformedQuantity",
    "MissingField",
    "RPCBlock",
    "RPCTransaction",
    "TranslationError",
    "TranslatorConfig",
    "UnsupportedBlockFormat",
    "UnsupportedReceiptFormat",
    "block_to_json",
    "json_to_block",
    "json_to_header",
    "json_to_receipt",
    "json_to_transaction",
    "to_json",
    "transaction_to_json",
)
