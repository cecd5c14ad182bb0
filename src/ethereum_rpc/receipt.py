"""
Receipt Translation
^^^^^^^^^^^^^^^^^^^

Reads JSON-RPC receipt objects into canonical receipts.

Receipts come in two shapes. Before [EIP-658] (Byzantium) a receipt commits
to the intermediate state root; afterwards it commits to the execution
status instead. A receipt carrying neither is rejected rather than guessed
at, since the wrong shape corrupts gas accounting downstream.

[EIP-658]: https://eips.ethereum.org/EIPS/eip-658
"""

import logging
from typing import Any, Mapping

from ethereum_canonical.blocks import (
    Log,
    PostByzantiumReceipt,
    PreByzantiumReceipt,
    Receipt,
)

from .exceptions import UnsupportedReceiptFormat
from .fields import read_field, require_field
from .hexadecimal import (
    hex_to_address,
    hex_to_bloom,
    hex_to_bytes,
    hex_to_hash,
    hex_to_root,
    hex_to_uint,
)

logger = logging.getLogger(__name__)

_EMPTY_ROOT = (None, "", "0x")


def json_to_log(raw: Mapping[str, Any]) -> Log:
    """Converts json log data to a log object"""
    return Log(
        address=read_field(raw, hex_to_address, "address"),
        topics=tuple(
            hex_to_hash(topic, "topics") for topic in raw.get("topics") or []
        ),
        data=read_field(raw, hex_to_bytes, "data"),
    )


def json_to_receipt(raw: Mapping[str, Any]) -> Receipt:
    """
    Converts a JSON-RPC receipt object to a canonical receipt.

    A non-empty ``root`` yields a pre-Byzantium receipt with that state root.
    Otherwise ``status`` must be present and be ``0x0`` or ``0x1``, yielding a
    post-Byzantium receipt.

    Parameters
    ----------
    raw :
        Receipt object as returned by `eth_getTransactionReceipt`.

    Returns
    -------
    receipt : `ethereum_canonical.blocks.Receipt`
        The canonical receipt, one of the two variants.
    """
    root = raw.get("root")
    status = raw.get("status")

    if root in _EMPTY_ROOT and status is None:
        raise UnsupportedReceiptFormat(
            "receipt carries neither a state root nor a status"
        )

    succeeded = None
    if root in _EMPTY_ROOT:
        code = hex_to_uint(status, "status")
        if code not in (0, 1):
            raise UnsupportedReceiptFormat(
                f"status must be 0x0 or 0x1, got {status!r}", "status"
            )
        succeeded = code == 1

    cumulative_gas_used = read_field(raw, hex_to_uint, "cumulativeGasUsed")
    bloom = read_field(raw, hex_to_bloom, "logsBloom")
    logs = tuple(json_to_log(log) for log in require_field(raw, "logs"))

    receipt: Receipt
    if succeeded is None:
        receipt = PreByzantiumReceipt(
            state_root=hex_to_root(root, "root"),
            cumulative_gas_used=cumulative_gas_used,
            bloom=bloom,
            logs=logs,
        )
    else:
        receipt = PostByzantiumReceipt(
            succeeded=succeeded,
            cumulative_gas_used=cumulative_gas_used,
            bloom=bloom,
            logs=logs,
        )

    logger.debug(
        "translated %s with %d logs", type(receipt).__name__, len(logs)
    )
    return receipt
