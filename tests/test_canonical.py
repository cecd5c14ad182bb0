from ethereum_rlp import rlp
from ethereum_types.bytes import Bytes8
from ethereum_types.numeric import Uint

from ethereum_canonical.blocks import (
    Block,
    compute_block_hash,
    compute_header_hash,
    encode_header,
)
from ethereum_canonical.crypto.hash import keccak256
from ethereum_canonical.fork_types import Address, Bloom
from ethereum_canonical.transactions import (
    encode_transaction,
    get_transaction_hash,
    tx_type,
)
from ethereum_rpc.header import json_to_header
from tests.helpers import (
    access_list_transaction,
    blob_transaction,
    create_header,
    fee_market_transaction,
    hex2hash,
    legacy_transaction,
)

MAINNET_GENESIS_HEADER = {
    "parentHash": "0x" + "00" * 32,
    "sha3Uncles": (
        "0x1dcc4de8dec75d7aab85b567b6ccd41ad312451b948a7413f0a142fd40d49347"
    ),
    "miner": "0x" + "00" * 20,
    "stateRoot": (
        "0xd7f8974fb5ac78d9ac099b9ad5018bedc2ce0a72dad1827a1709da30580f0544"
    ),
    "transactionsRoot": (
        "0x56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421"
    ),
    "receiptsRoot": (
        "0x56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421"
    ),
    "logsBloom": "0x" + "00" * 256,
    "difficulty": "0x400000000",
    "number": "0x0",
    "gasLimit": "0x1388",
    "gasUsed": "0x0",
    "timestamp": "0x0",
    "extraData": (
        "0x11bbe8db4e347b4e8c937c1c8370e4b5ed33adb3db69cbdb7a38e1e50b1b82fa"
    ),
    "mixHash": "0x" + "00" * 32,
    "nonce": "0x0000000000000042",
}


def test_genesis_block_hash() -> None:
    header = json_to_header(MAINNET_GENESIS_HEADER)

    assert header.coinbase == Address(b"\x00" * 20)
    assert header.bloom == Bloom(b"\x00" * 256)
    assert header.nonce == Bytes8(b"\x00" * 7 + b"\x42")
    assert compute_header_hash(header) == hex2hash(
        "0xd4e56740f876aef8c010b86a40d5f56745a118d0906a34e69aec8c0db1cb8fa3"
    )


def test_encode_header_stops_at_first_absent_field() -> None:
    london = create_header()
    frontier = create_header(base_fee_per_gas=None)
    cancun = create_header(
        base_fee_per_gas=Uint(1),
        withdrawals_root=hex2hash("0x" + "55" * 32),
        blob_gas_used=Uint(0),
        excess_blob_gas=Uint(0),
        parent_beacon_block_root=hex2hash("0x" + "66" * 32),
    )

    assert len(rlp.decode(encode_header(frontier))) == 15
    assert len(rlp.decode(encode_header(london))) == 16
    assert len(rlp.decode(encode_header(cancun))) == 20


def test_block_hash_is_header_hash() -> None:
    header = create_header()
    block = Block(header=header, transactions=(), withdrawals=None)
    assert compute_block_hash(block) == compute_header_hash(header)


def test_legacy_transaction_hash() -> None:
    tx = legacy_transaction()

    assert tx_type(tx) == 0
    assert encode_transaction(tx) is tx
    assert get_transaction_hash(tx) == keccak256(rlp.encode(tx))


def test_typed_transaction_hash() -> None:
    for tx, prefix in (
        (access_list_transaction(), b"\x01"),
        (fee_market_transaction(), b"\x02"),
        (blob_transaction(), b"\x03"),
    ):
        encoded = encode_transaction(tx)
        assert isinstance(encoded, bytes)
        assert encoded[:1] == prefix
        assert tx_type(tx) == prefix[0]
        assert get_transaction_hash(tx) == keccak256(encoded)
