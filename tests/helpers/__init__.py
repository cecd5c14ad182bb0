from dataclasses import replace
from typing import Any, Dict

import coincurve
from ethereum_types.bytes import Bytes, Bytes0, Bytes8
from ethereum_types.numeric import U64, U256, Uint

from ethereum_canonical.blocks import Block, Header, Withdrawal
from ethereum_canonical.crypto.elliptic_curve import secp256k1_sign
from ethereum_canonical.crypto.hash import Hash32, keccak256
from ethereum_canonical.fork_types import Address, Bloom, Root
from ethereum_canonical.transactions import (
    AccessListTransaction,
    BlobTransaction,
    FeeMarketTransaction,
    LegacyTransaction,
    Transaction,
    signing_hash_155,
    signing_hash_1559,
    signing_hash_2930,
    signing_hash_4844,
)

SECRET_KEY = 0x45A915E4D060149EB4365960E6A7A45F334393093061116B197E3240065FF2D8
CHAIN_ID = U64(1)

RECIPIENT = Address(bytes.fromhex("1000000000000000000000000000000000000001"))
STORAGE_KEY = Hash32(b"\x00" * 31 + b"\x01")
VERSIONED_HASH = Hash32(b"\x01" + b"\x22" * 31)

EMPTY_OMMERS_HASH = Hash32(
    bytes.fromhex(
        "1dcc4de8dec75d7aab85b567b6ccd41ad312451b948a7413f0a142fd40d49347"
    )
)
EMPTY_TRIE_ROOT = Root(
    bytes.fromhex(
        "56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421"
    )
)


def hex2hash(x: str) -> Hash32:
    return Hash32(bytes.fromhex(x[2:]))


def address_of(secret_key: int) -> Address:
    public_key = coincurve.PrivateKey.from_int(secret_key).public_key
    return Address(keccak256(public_key.format(compressed=False)[1:])[12:32])


SENDER = address_of(SECRET_KEY)


def sign_transaction(tx: Transaction, secret_key: int = SECRET_KEY) -> Any:
    """
    Return a copy of `tx` signed with `secret_key`. Legacy transactions are
    signed with EIP-155 replay protection for `CHAIN_ID`.
    """
    if isinstance(tx, LegacyTransaction):
        r, s, recovery_id = secp256k1_sign(
            signing_hash_155(tx, CHAIN_ID), secret_key
        )
        v = recovery_id + U256(35) + U256(CHAIN_ID) * U256(2)
        return replace(tx, v=v, r=r, s=s)

    if isinstance(tx, AccessListTransaction):
        signing_hash = signing_hash_2930(tx)
    elif isinstance(tx, FeeMarketTransaction):
        signing_hash = signing_hash_1559(tx)
    else:
        signing_hash = signing_hash_4844(tx)

    r, s, y_parity = secp256k1_sign(signing_hash, secret_key)
    return replace(tx, y_parity=y_parity, r=r, s=s)


def legacy_transaction(**kwargs: Any) -> LegacyTransaction:
    fields: Dict[str, Any] = dict(
        nonce=U256(0),
        gas_price=Uint(10**10),
        gas=Uint(21_000),
        to=RECIPIENT,
        value=U256(10**18),
        data=Bytes(b""),
        v=U256(0),
        r=U256(0),
        s=U256(0),
    )
    fields.update(kwargs)
    return sign_transaction(LegacyTransaction(**fields))


def access_list_transaction(**kwargs: Any) -> AccessListTransaction:
    fields: Dict[str, Any] = dict(
        chain_id=CHAIN_ID,
        nonce=U256(1),
        gas_price=Uint(10**10),
        gas=Uint(50_000),
        to=RECIPIENT,
        value=U256(0),
        data=Bytes(b"\x12\x34"),
        access_list=((RECIPIENT, (STORAGE_KEY,)),),
        y_parity=U256(0),
        r=U256(0),
        s=U256(0),
    )
    fields.update(kwargs)
    return sign_transaction(AccessListTransaction(**fields))


def fee_market_transaction(**kwargs: Any) -> FeeMarketTransaction:
    fields: Dict[str, Any] = dict(
        chain_id=CHAIN_ID,
        nonce=U256(2),
        max_priority_fee_per_gas=Uint(10**9),
        max_fee_per_gas=Uint(3 * 10**10),
        gas=Uint(100_000),
        to=RECIPIENT,
        value=U256(2**70),
        data=Bytes(b""),
        access_list=(),
        y_parity=U256(0),
        r=U256(0),
        s=U256(0),
    )
    fields.update(kwargs)
    return sign_transaction(FeeMarketTransaction(**fields))


def blob_transaction(**kwargs: Any) -> BlobTransaction:
    fields: Dict[str, Any] = dict(
        chain_id=CHAIN_ID,
        nonce=U256(3),
        max_priority_fee_per_gas=Uint(10**9),
        max_fee_per_gas=Uint(3 * 10**10),
        gas=Uint(21_000),
        to=RECIPIENT,
        value=U256(0),
        data=Bytes(b""),
        access_list=(),
        max_fee_per_blob_gas=U256(10**9),
        blob_versioned_hashes=(VERSIONED_HASH,),
        y_parity=U256(0),
        r=U256(0),
        s=U256(0),
    )
    fields.update(kwargs)
    return sign_transaction(BlobTransaction(**fields))


def contract_creation() -> LegacyTransaction:
    return legacy_transaction(
        nonce=U256(4), to=Bytes0(b""), data=Bytes(b"\x60\x00\x60\x00")
    )


def create_header(**kwargs: Any) -> Header:
    """
    A London header; pass the post-London fields to move it to a later fork.
    """
    fields: Dict[str, Any] = dict(
        parent_hash=Hash32(b"\x11" * 32),
        ommers_hash=EMPTY_OMMERS_HASH,
        coinbase=Address(b"\x22" * 20),
        state_root=Root(b"\x33" * 32),
        transactions_root=EMPTY_TRIE_ROOT,
        receipt_root=EMPTY_TRIE_ROOT,
        bloom=Bloom(b"\x00" * 256),
        difficulty=Uint(2**80),
        number=Uint(15_000_000),
        gas_limit=Uint(30_000_000),
        gas_used=Uint(21_000),
        timestamp=Uint(1_650_000_000),
        extra_data=Bytes(b"geth"),
        mix_hash=Hash32(b"\x44" * 32),
        nonce=Bytes8(b"\x00" * 7 + b"\x42"),
        base_fee_per_gas=Uint(7),
        withdrawals_root=None,
        blob_gas_used=None,
        excess_blob_gas=None,
        parent_beacon_block_root=None,
    )
    fields.update(kwargs)
    return Header(**fields)


def cancun_block() -> Block:
    header = create_header(
        base_fee_per_gas=Uint(0),
        withdrawals_root=Root(b"\x55" * 32),
        blob_gas_used=Uint(131_072),
        excess_blob_gas=Uint(0),
        parent_beacon_block_root=Root(b"\x66" * 32),
    )
    transactions = (
        legacy_transaction(),
        access_list_transaction(),
        fee_market_transaction(),
        blob_transaction(),
        contract_creation(),
    )
    withdrawals = (
        Withdrawal(
            index=U64(9),
            validator_index=U64(123_456),
            address=RECIPIENT,
            amount=U256(32 * 10**9),
        ),
    )
    return Block(
        header=header, transactions=transactions, withdrawals=withdrawals
    )


def header_json(**kwargs: Any) -> Dict[str, Any]:
    """
    Header fields of a London block as served by a node.
    """
    fields: Dict[str, Any] = {
        "parentHash": "0x" + "11" * 32,
        "sha3Uncles": "0x" + EMPTY_OMMERS_HASH.hex(),
        "miner": "0x" + "22" * 20,
        "stateRoot": "0x" + "33" * 32,
        "transactionsRoot": "0x" + EMPTY_TRIE_ROOT.hex(),
        "receiptsRoot": "0x" + EMPTY_TRIE_ROOT.hex(),
        "logsBloom": "0x" + "00" * 256,
        "difficulty": "0x100000000000000000000",
        "number": "0xe4e1c0",
        "gasLimit": "0x1c9c380",
        "gasUsed": "0x5208",
        "timestamp": "0x62590080",
        "extraData": "0x67657468",
        "mixHash": "0x" + "44" * 32,
        "nonce": "0x0000000000000042",
        "baseFeePerGas": "0x7",
    }
    fields.update(kwargs)
    return fields


def legacy_transaction_json(**kwargs: Any) -> Dict[str, Any]:
    fields: Dict[str, Any] = {
        "blockHash": None,
        "blockNumber": None,
        "from": "0x" + SENDER.hex(),
        "gas": "0x5208",
        "gasPrice": "0x2540be400",
        "hash": "0x" + "ab" * 32,
        "input": "0x",
        "nonce": "0x0",
        "to": "0x" + RECIPIENT.hex(),
        "transactionIndex": None,
        "value": "0xde0b6b3a7640000",
        "type": "0x0",
        "v": "0x25",
        "r": "0x1",
        "s": "0x2",
    }
    fields.update(kwargs)
    return fields


def fee_market_transaction_json(**kwargs: Any) -> Dict[str, Any]:
    fields = legacy_transaction_json(
        type="0x2",
        chainId="0x1",
        maxFeePerGas="0x6fc23ac00",
        maxPriorityFeePerGas="0x3b9aca00",
        accessList=[],
        v="0x1",
        yParity="0x1",
    )
    del fields["gasPrice"]
    fields.update(kwargs)
    return fields
