"""
Transaction Translation
^^^^^^^^^^^^^^^^^^^^^^^

Reads JSON-RPC transaction objects into canonical transactions, and renders
canonical transactions back into JSON-RPC transaction objects.

The canonical variant of an incoming transaction is decided by the fee
fields it carries, never by its ``type`` tag, which some nodes omit or report
inconsistently. See :func:`transaction_variant`.
"""

import logging
from dataclasses import fields
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from ethereum_types.bytes import Bytes, Bytes0
from ethereum_types.numeric import U64, U256, Uint

from ethereum_canonical.blocks import Block, compute_block_hash
from ethereum_canonical.fork_types import VersionedHash
from ethereum_canonical.transactions import (
    AccessList,
    AccessListTransaction,
    BlobTransaction,
    FeeMarketTransaction,
    LegacyTransaction,
    Transaction,
    get_transaction_hash,
    recover_sender,
    tx_type,
)

from . import types as rpc
from .config import DEFAULT_CONFIG, TranslatorConfig
from .exceptions import InconsistentTransactionShape
from .fields import has_field, read_field, read_optional_field
from .hexadecimal import (
    hex_to_address,
    hex_to_bytes,
    hex_to_hash,
    hex_to_u64,
    hex_to_u256,
    hex_to_uint,
)

logger = logging.getLogger(__name__)

_TYPE_NUMBERS = {
    LegacyTransaction: 0,
    AccessListTransaction: 1,
    FeeMarketTransaction: 2,
    BlobTransaction: 3,
}

_EMPTY_TO = (None, "", "0x")


def transaction_variant(
    raw: Mapping[str, Any], config: TranslatorConfig = DEFAULT_CONFIG
) -> Type[Transaction]:
    """
    Decide which canonical transaction class a wire payload describes.

    1. Blob fields (``maxFeePerBlobGas``, ``blobVersionedHashes``) select a
       blob transaction.
    2. Fee-market fields (``maxFeePerGas``, ``maxPriorityFeePerGas``) select a
       fee market transaction. Either may be omitted, in which case it
       reads as zero.
    3. An ``accessList`` on a transaction not tagged ``0x0`` selects an
       access list transaction.
    4. Anything else is a legacy transaction, which requires ``gasPrice``.

    A ``gasPrice`` next to fee-market fields is ignored, unless
    `config.reject_mixed_fee_fields` is set.
    """
    has_max_fee = has_field(raw, "maxFeePerGas")
    has_priority_fee = has_field(raw, "maxPriorityFeePerGas")
    has_gas_price = has_field(raw, "gasPrice")
    declared_type = None
    if has_field(raw, "type"):
        declared_type = int(hex_to_uint(raw["type"], "type"))

    tx_cls: Type[Transaction]
    if has_field(raw, "maxFeePerBlobGas", "blobVersionedHashes"):
        tx_cls = BlobTransaction
    elif has_max_fee or has_priority_fee:
        tx_cls = FeeMarketTransaction
    elif has_field(raw, "accessList") and declared_type != 0:
        tx_cls = AccessListTransaction
    else:
        tx_cls = LegacyTransaction

    if tx_cls in (FeeMarketTransaction, BlobTransaction):
        if has_gas_price:
            if config.reject_mixed_fee_fields:
                raise InconsistentTransactionShape(
                    "both gasPrice and fee-market fields are present"
                )
            logger.debug("ignoring gasPrice of a fee-market transaction")
    elif not has_gas_price:
        raise InconsistentTransactionShape(
            "neither gasPrice nor fee-market fields are present"
        )

    if declared_type is not None and declared_type != _TYPE_NUMBERS[tx_cls]:
        logger.debug(
            "transaction tagged as type %d read as %s",
            declared_type,
            tx_cls.__name__,
        )

    return tx_cls


class TransactionLoad:
    """
    Class for loading a canonical transaction from a JSON-RPC transaction
    object.

    Each field of the canonical transaction classes has a matching
    ``json_to_<field>`` method, so :meth:`read` can fill in whichever variant
    :func:`transaction_variant` picks.
    """

    def __init__(
        self, raw: Mapping[str, Any], config: TranslatorConfig = DEFAULT_CONFIG
    ) -> None:
        self.raw = raw
        self.config = config

    def json_to_chain_id(self) -> U64:
        """Get chain ID for the transaction."""
        return read_field(self.raw, hex_to_u64, "chainId")

    def json_to_nonce(self) -> U256:
        """Get the nonce for the transaction."""
        return read_field(self.raw, hex_to_u256, "nonce")

    def json_to_gas_price(self) -> Uint:
        """Get the gas price for the transaction."""
        return read_field(self.raw, hex_to_uint, "gasPrice")

    def json_to_gas(self) -> Uint:
        """Get the gas limit for the transaction."""
        return read_field(self.raw, hex_to_uint, "gas", "gasLimit")

    def json_to_to(self) -> Bytes:
        """
        Get to address for the transaction. An absent recipient marks a
        contract creation and is represented by empty bytes, never by the
        zero address.
        """
        value = self.raw.get("to")
        if value in _EMPTY_TO:
            return Bytes0(b"")
        return hex_to_address(value, "to")

    def json_to_value(self) -> U256:
        """Get the value of the transaction."""
        return read_field(self.raw, hex_to_u256, "value")

    def json_to_data(self) -> Bytes:
        """Get the data of the transaction."""
        return read_field(self.raw, hex_to_bytes, "input", "data")

    def json_to_access_list(self) -> AccessList:
        """
        Get the access list of the transaction. A missing list reads as
        empty.
        """
        access_list = []
        for index, entry in enumerate(self.raw.get("accessList") or []):
            field = f"accessList[{index}]"
            if not isinstance(entry, Mapping):
                raise InconsistentTransactionShape(
                    "access list entry is not an object", field
                )
            address = hex_to_address(entry.get("address"), field)
            storage_keys = tuple(
                hex_to_hash(key, f"{field}.storageKeys")
                for key in entry.get("storageKeys") or []
            )
            access_list.append((address, storage_keys))
        return tuple(access_list)

    def json_to_max_priority_fee_per_gas(self) -> Uint:
        """Get the max priority fee per gas of the transaction."""
        fee = read_optional_field(
            self.raw, hex_to_uint, "maxPriorityFeePerGas"
        )
        return Uint(0) if fee is None else fee

    def json_to_max_fee_per_gas(self) -> Uint:
        """Get the max fee per gas of the transaction."""
        fee = read_optional_field(self.raw, hex_to_uint, "maxFeePerGas")
        return Uint(0) if fee is None else fee

    def json_to_max_fee_per_blob_gas(self) -> U256:
        """Get the max fee per blob gas of the transaction."""
        return read_field(self.raw, hex_to_u256, "maxFeePerBlobGas")

    def json_to_blob_versioned_hashes(self) -> Tuple[VersionedHash, ...]:
        """Get the blob versioned hashes of the transaction."""
        return tuple(
            hex_to_hash(blob_hash, "blobVersionedHashes")
            for blob_hash in self.raw.get("blobVersionedHashes") or []
        )

    def json_to_v(self) -> U256:
        """Get the v value of the transaction."""
        return read_field(self.raw, hex_to_u256, "v")

    def json_to_y_parity(self) -> U256:
        """Get the y parity of the transaction."""
        return read_field(self.raw, hex_to_u256, "yParity", "v")

    def json_to_r(self) -> U256:
        """Get the r value of the transaction"""
        return read_field(self.raw, hex_to_u256, "r")

    def json_to_s(self) -> U256:
        """Get the s value of the transaction"""
        return read_field(self.raw, hex_to_u256, "s")

    def get_parameters(self, tx_cls: Type[Transaction]) -> List:
        """
        Extract all the transaction parameters from the json payload
        """
        parameters = []
        for field in fields(tx_cls):
            parameters.append(getattr(self, f"json_to_{field.name}")())
        return parameters

    def read(self) -> Transaction:
        """Convert json transaction data to a transaction object"""
        tx_cls = transaction_variant(self.raw, self.config)
        parameters = self.get_parameters(tx_cls)
        if tx_cls is BlobTransaction and self.json_to_to() == Bytes0(b""):
            raise InconsistentTransactionShape(
                "blob transactions cannot create contracts", "to"
            )
        return tx_cls(*parameters)


def json_to_transaction(
    raw: Mapping[str, Any], config: TranslatorConfig = DEFAULT_CONFIG
) -> Transaction:
    """
    Converts a JSON-RPC transaction object to a canonical transaction.

    Parameters
    ----------
    raw :
        Transaction object as returned by the node.
    config :
        Translator options.

    Returns
    -------
    transaction : `ethereum_canonical.transactions.Transaction`
        The canonical transaction, one of the four variants.
    """
    tx = TransactionLoad(raw, config).read()
    logger.debug("translated %s", type(tx).__name__)
    return tx


def access_list_to_json(
    access_list: AccessList,
) -> List[rpc.RPCAccessListEntry]:
    """Render an access list as JSON-RPC access list entries."""
    return [
        rpc.RPCAccessListEntry(
            address=rpc.Address(address),
            storage_keys=[rpc.Hash(key) for key in storage_keys],
        )
        for address, storage_keys in access_list
    ]


def transaction_to_json(
    tx: Transaction,
    block: Optional[Block] = None,
    tx_index: Optional[int] = None,
) -> rpc.RPCTransaction:
    """
    Converts a canonical transaction to a JSON-RPC transaction object.

    The hash and the sender come from the canonical model. Without an
    enclosing block (a pending transaction) ``blockHash`` and ``blockNumber``
    are ``null``, and ``transactionIndex`` is ``null`` without an index.

    Fee market and blob transactions have no single gas price; for them
    ``gasPrice`` reports ``maxFeePerGas``, which is what consumers expecting
    the field have historically received.

    Parameters
    ----------
    tx :
        Transaction of interest.
    block :
        The block containing the transaction, if any.
    tx_index :
        Position of the transaction within `block`.

    Returns
    -------
    transaction : `ethereum_rpc.types.RPCTransaction`
        The transaction object.
    """
    parameters: Dict[str, Any] = dict(
        block_hash=None,
        block_number=None,
        transaction_index=None,
        sender=rpc.Address(recover_sender(tx)),
        gas=rpc.HexNumber(tx.gas),
        ty=rpc.HexNumber(tx_type(tx)),
        transaction_hash=rpc.Hash(get_transaction_hash(tx)),
        input=rpc.Bytes(tx.data),
        nonce=rpc.HexNumber(tx.nonce),
        to=None if tx.to == Bytes0(b"") else rpc.Address(tx.to),
        value=rpc.HexNumber(tx.value),
        r=rpc.HexNumber(tx.r),
        s=rpc.HexNumber(tx.s),
    )

    if block is not None:
        parameters["block_hash"] = rpc.Hash(compute_block_hash(block))
        parameters["block_number"] = rpc.HexNumber(block.header.number)
    if tx_index is not None:
        parameters["transaction_index"] = rpc.HexNumber(tx_index)

    if isinstance(tx, LegacyTransaction):
        parameters["gas_price"] = rpc.HexNumber(tx.gas_price)
        parameters["v"] = rpc.HexNumber(tx.v)
        return rpc.RPCTransaction(**parameters)

    parameters["chain_id"] = rpc.HexNumber(tx.chain_id)
    parameters["access_list"] = access_list_to_json(tx.access_list)
    parameters["v"] = rpc.HexNumber(tx.y_parity)
    parameters["y_parity"] = rpc.HexNumber(tx.y_parity)

    if isinstance(tx, AccessListTransaction):
        parameters["gas_price"] = rpc.HexNumber(tx.gas_price)
    else:
        parameters["gas_price"] = rpc.HexNumber(tx.max_fee_per_gas)
        parameters["max_fee_per_gas"] = rpc.HexNumber(tx.max_fee_per_gas)
        parameters["max_priority_fee_per_gas"] = rpc.HexNumber(
            tx.max_priority_fee_per_gas
        )

    if isinstance(tx, BlobTransaction):
        parameters["max_fee_per_blob_gas"] = rpc.HexNumber(
            tx.max_fee_per_blob_gas
        )
        parameters["blob_versioned_hashes"] = [
            rpc.Hash(blob_hash) for blob_hash in tx.blob_versioned_hashes
        ]

    return rpc.RPCTransaction(**parameters)
