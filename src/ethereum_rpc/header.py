"""
Header Translation
^^^^^^^^^^^^^^^^^^

Builds canonical headers from the header fields of a JSON-RPC block.

Hash and byte fields are renamed onto their canonical counterparts
(``sha3Uncles`` becomes the ommers hash, ``miner`` the coinbase, and so on)
and numeric fields are decoded as arbitrary-precision quantities. Fields
introduced by later forks are carried over when the node supplies them and
left as `None` otherwise; which fork is active at a given height is not
decided here.
"""

import logging
from typing import Any, Mapping

from ethereum_canonical.blocks import Header

from .fields import read_field, read_optional_field
from .hexadecimal import (
    hex_to_address,
    hex_to_bloom,
    hex_to_bytes,
    hex_to_bytes8,
    hex_to_hash,
    hex_to_root,
    hex_to_uint,
)

logger = logging.getLogger(__name__)


def json_to_header(raw: Mapping[str, Any]) -> Header:
    """
    Converts json header data to a header object.

    The spellings used by test fixtures (``uncleHash``, ``coinbase``,
    ``transactionsTrie``, ``receiptTrie``, ``bloom``) are accepted alongside
    the JSON-RPC ones.

    Parameters
    ----------
    raw :
        A block or header object as returned by the node.

    Returns
    -------
    header : `ethereum_canonical.blocks.Header`
        The canonical header.
    """
    header = Header(
        parent_hash=read_field(raw, hex_to_hash, "parentHash"),
        ommers_hash=read_field(raw, hex_to_hash, "sha3Uncles", "uncleHash"),
        coinbase=read_field(raw, hex_to_address, "miner", "coinbase"),
        state_root=read_field(raw, hex_to_root, "stateRoot"),
        transactions_root=read_field(
            raw, hex_to_root, "transactionsRoot", "transactionsTrie"
        ),
        receipt_root=read_field(
            raw, hex_to_root, "receiptsRoot", "receiptTrie"
        ),
        bloom=read_field(raw, hex_to_bloom, "logsBloom", "bloom"),
        difficulty=read_field(raw, hex_to_uint, "difficulty"),
        number=read_field(raw, hex_to_uint, "number"),
        gas_limit=read_field(raw, hex_to_uint, "gasLimit"),
        gas_used=read_field(raw, hex_to_uint, "gasUsed"),
        timestamp=read_field(raw, hex_to_uint, "timestamp"),
        extra_data=read_field(raw, hex_to_bytes, "extraData"),
        mix_hash=read_field(raw, hex_to_hash, "mixHash"),
        nonce=read_field(raw, hex_to_bytes8, "nonce"),
        base_fee_per_gas=read_optional_field(
            raw, hex_to_uint, "baseFeePerGas"
        ),
        withdrawals_root=read_optional_field(
            raw, hex_to_root, "withdrawalsRoot"
        ),
        blob_gas_used=read_optional_field(raw, hex_to_uint, "blobGasUsed"),
        excess_blob_gas=read_optional_field(
            raw, hex_to_uint, "excessBlobGas"
        ),
        parent_beacon_block_root=read_optional_field(
            raw, hex_to_root, "parentBeaconBlockRoot"
        ),
    )

    logger.debug("translated header of block %d", int(header.number))
    return header
