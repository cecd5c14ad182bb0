"""
A `Block` is a single link in the chain that is Ethereum. Each `Block` contains
a `Header` and zero or more transactions. Each `Header` contains associated
metadata like the block number, parent block hash, and how much gas was
consumed by its transactions.

Headers grow new fields as forks activate: the base fee with London, the
withdrawals root with Shanghai, and the blob gas counters together with the
parent beacon block root with Cancun. A field that has not been activated is
`None`, which is distinct from a zero value.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from ethereum_rlp import Extended, rlp
from ethereum_types.bytes import Bytes, Bytes8, Bytes32
from ethereum_types.frozen import slotted_freezable
from ethereum_types.numeric import U64, U256, Uint

from .crypto.hash import Hash32, keccak256
from .fork_types import Address, Bloom, Root
from .transactions import Transaction


@slotted_freezable
@dataclass
class Withdrawal:
    """
    Withdrawals that have been validated on the consensus layer.
    """

    index: U64
    validator_index: U64
    address: Address
    amount: U256


@slotted_freezable
@dataclass
class Header:
    """
    Header portion of a block on the chain.
    """

    parent_hash: Hash32
    ommers_hash: Hash32
    coinbase: Address
    state_root: Root
    transactions_root: Root
    receipt_root: Root
    bloom: Bloom
    difficulty: Uint
    number: Uint
    gas_limit: Uint
    gas_used: Uint
    timestamp: Uint
    extra_data: Bytes
    mix_hash: Bytes32
    nonce: Bytes8
    base_fee_per_gas: Optional[Uint]
    withdrawals_root: Optional[Root]
    blob_gas_used: Optional[Uint]
    excess_blob_gas: Optional[Uint]
    parent_beacon_block_root: Optional[Root]


@slotted_freezable
@dataclass
class Block:
    """
    A complete block.
    """

    header: Header
    transactions: Tuple[Transaction, ...]
    withdrawals: Optional[Tuple[Withdrawal, ...]]


@slotted_freezable
@dataclass
class Log:
    """
    Data record produced during the execution of a transaction.
    """

    address: Address
    topics: Tuple[Hash32, ...]
    data: Bytes


@slotted_freezable
@dataclass
class PreByzantiumReceipt:
    """
    Result of a transaction before Byzantium, committing to the intermediate
    state root.
    """

    state_root: Root
    cumulative_gas_used: Uint
    bloom: Bloom
    logs: Tuple[Log, ...]


@slotted_freezable
@dataclass
class PostByzantiumReceipt:
    """
    Result of a transaction from Byzantium onwards, committing to the
    execution status ([EIP-658]).

    [EIP-658]: https://eips.ethereum.org/EIPS/eip-658
    """

    succeeded: bool
    cumulative_gas_used: Uint
    bloom: Bloom
    logs: Tuple[Log, ...]


Receipt = Union[PreByzantiumReceipt, PostByzantiumReceipt]


def encode_header(header: Header) -> Bytes:
    """
    RLP-encode a header.

    Optional fields are appended in fork order and the list stops at the
    first absent one, so a London header encodes sixteen items and a Cancun
    header twenty.
    """
    fields: List[Extended] = [
        header.parent_hash,
        header.ommers_hash,
        header.coinbase,
        header.state_root,
        header.transactions_root,
        header.receipt_root,
        header.bloom,
        header.difficulty,
        header.number,
        header.gas_limit,
        header.gas_used,
        header.timestamp,
        header.extra_data,
        header.mix_hash,
        header.nonce,
    ]
    optional_fields = (
        header.base_fee_per_gas,
        header.withdrawals_root,
        header.blob_gas_used,
        header.excess_blob_gas,
        header.parent_beacon_block_root,
    )
    for field in optional_fields:
        if field is None:
            break
        fields.append(field)

    return rlp.encode(fields)


def compute_header_hash(header: Header) -> Hash32:
    """
    Computes the hash of a block header.

    Parameters
    ----------
    header :
        Header of interest.

    Returns
    -------
    hash : `ethereum_canonical.crypto.hash.Hash32`
        Hash of the header.
    """
    return keccak256(encode_header(header))


def compute_block_hash(block: Block) -> Hash32:
    """
    A block is identified by the hash of its header.
    """
    return compute_header_hash(block.header)
