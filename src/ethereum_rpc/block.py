"""
Block Translation
^^^^^^^^^^^^^^^^^

Reads JSON-RPC block objects into canonical blocks, and renders canonical
blocks back into JSON-RPC block objects.

Inbound blocks must be requested with full transaction objects: a canonical
block cannot be built from transaction hashes alone.
"""

import logging
from typing import Any, Dict, List, Mapping, Sequence, SupportsInt

from ethereum_canonical.blocks import Block, Withdrawal, compute_block_hash
from ethereum_canonical.transactions import get_transaction_hash

from . import types as rpc
from .config import DEFAULT_CONFIG, TranslatorConfig
from .exceptions import InconsistentTransactionShape, UnsupportedBlockFormat
from .fields import read_field, require_field
from .header import json_to_header
from .hexadecimal import hex_to_address, hex_to_u64, hex_to_u256, hex_to_uint
from .transaction import json_to_transaction, transaction_to_json

logger = logging.getLogger(__name__)


def json_to_withdrawal(raw: Mapping[str, Any]) -> Withdrawal:
    """Converts json withdrawal data to a withdrawal object"""
    return Withdrawal(
        index=read_field(raw, hex_to_u64, "index"),
        validator_index=read_field(raw, hex_to_u64, "validatorIndex"),
        address=read_field(raw, hex_to_address, "address"),
        amount=read_field(raw, hex_to_u256, "amount"),
    )


def json_to_block(
    raw: Mapping[str, Any], config: TranslatorConfig = DEFAULT_CONFIG
) -> Block:
    """
    Converts a JSON-RPC block object to a canonical block.

    The header is read by :func:`~ethereum_rpc.header.json_to_header` and
    every transaction, in order, by
    :func:`~ethereum_rpc.transaction.json_to_transaction`. Withdrawals are
    read when the block carries them.

    Parameters
    ----------
    raw :
        Block object as returned by `eth_getBlockByNumber` with full
        transaction objects.
    config :
        Translator options, passed on to the transaction translator.

    Returns
    -------
    block : `ethereum_canonical.blocks.Block`
        The canonical block.
    """
    header = json_to_header(raw)

    transactions = []
    for index, raw_tx in enumerate(require_field(raw, "transactions")):
        if isinstance(raw_tx, str):
            raise UnsupportedBlockFormat(
                "block lists transaction hashes instead of transactions",
                f"transactions[{index}]",
            )
        if not isinstance(raw_tx, Mapping):
            raise InconsistentTransactionShape(
                "transaction is not an object", f"transactions[{index}]"
            )
        transactions.append(json_to_transaction(raw_tx, config))

    withdrawals = None
    if raw.get("withdrawals") is not None:
        withdrawals = tuple(
            json_to_withdrawal(wd) for wd in raw["withdrawals"]
        )

    logger.debug(
        "translated block %d with %d transactions",
        int(header.number),
        len(transactions),
    )
    return Block(
        header=header,
        transactions=tuple(transactions),
        withdrawals=withdrawals,
    )


def withdrawal_to_json(withdrawal: Withdrawal) -> rpc.RPCWithdrawal:
    """Render a withdrawal as a JSON-RPC withdrawal object."""
    return rpc.RPCWithdrawal(
        index=rpc.HexNumber(withdrawal.index),
        validator_index=rpc.HexNumber(withdrawal.validator_index),
        address=rpc.Address(withdrawal.address),
        amount=rpc.HexNumber(withdrawal.amount),
    )


def block_to_json(
    block: Block,
    total_difficulty: SupportsInt,
    ommer_hashes: Sequence[bytes],
    include_transactions: bool,
) -> rpc.RPCBlock:
    """
    Converts a canonical block to a JSON-RPC block object.

    Header fields are taken from the canonical header, and fields of forks
    the header does not carry are omitted. `include_transactions` selects
    between full transaction objects and bare transaction hashes, both in
    block order.

    ``size`` is the byte length of the compact JSON encoding of the block
    object, measured on the encoding produced without the ``size`` field.

    Parameters
    ----------
    block :
        Block of interest.
    total_difficulty :
        Total difficulty of the chain up to and including `block`.
    ommer_hashes :
        Hashes of the ommers (uncles) of `block`.
    include_transactions :
        Whether to embed full transaction objects rather than hashes.

    Returns
    -------
    block : `ethereum_rpc.types.RPCBlock`
        The block object.
    """
    header = block.header
    total_difficulty = hex_to_uint(int(total_difficulty), "totalDifficulty")

    transactions: List[rpc.RPCTransaction] | List[rpc.Hash]
    if include_transactions:
        transactions = [
            transaction_to_json(tx, block, index)
            for index, tx in enumerate(block.transactions)
        ]
    else:
        transactions = [
            rpc.Hash(get_transaction_hash(tx)) for tx in block.transactions
        ]

    parameters: Dict[str, Any] = dict(
        number=rpc.HexNumber(header.number),
        block_hash=rpc.Hash(compute_block_hash(block)),
        parent_hash=rpc.Hash(header.parent_hash),
        mix_hash=rpc.Hash(header.mix_hash),
        nonce=rpc.HeaderNonce(header.nonce),
        sha3_uncles=rpc.Hash(header.ommers_hash),
        logs_bloom=rpc.Bloom(header.bloom),
        transactions_root=rpc.Hash(header.transactions_root),
        state_root=rpc.Hash(header.state_root),
        receipts_root=rpc.Hash(header.receipt_root),
        miner=rpc.Address(header.coinbase),
        difficulty=rpc.HexNumber(header.difficulty),
        total_difficulty=rpc.HexNumber(total_difficulty),
        extra_data=rpc.Bytes(header.extra_data),
        gas_limit=rpc.HexNumber(header.gas_limit),
        gas_used=rpc.HexNumber(header.gas_used),
        timestamp=rpc.HexNumber(header.timestamp),
        transactions=transactions,
        uncles=[rpc.Hash(ommer_hash) for ommer_hash in ommer_hashes],
    )

    if header.base_fee_per_gas is not None:
        parameters["base_fee_per_gas"] = rpc.HexNumber(header.base_fee_per_gas)
    if header.withdrawals_root is not None:
        parameters["withdrawals_root"] = rpc.Hash(header.withdrawals_root)
    if block.withdrawals is not None:
        parameters["withdrawals"] = [
            withdrawal_to_json(wd) for wd in block.withdrawals
        ]
    if header.blob_gas_used is not None:
        parameters["blob_gas_used"] = rpc.HexNumber(header.blob_gas_used)
    if header.excess_blob_gas is not None:
        parameters["excess_blob_gas"] = rpc.HexNumber(header.excess_blob_gas)
    if header.parent_beacon_block_root is not None:
        parameters["parent_beacon_block_root"] = rpc.Hash(
            header.parent_beacon_block_root
        )

    size = len(rpc.to_json_bytes(rpc.RPCBlock(**parameters)))

    logger.debug(
        "rendered block %d (%d bytes)", int(header.number), size
    )
    return rpc.RPCBlock(**parameters, size=rpc.HexNumber(size))
