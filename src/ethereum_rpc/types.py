"""Pydantic models of the JSON-RPC block and transaction responses."""

from typing import Any, ClassVar, Dict, List, SupportsInt, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, GetCoreSchemaHandler
from pydantic.alias_generators import to_camel
from pydantic_core.core_schema import (
    PlainValidatorFunctionSchema,
    no_info_plain_validator_function,
    to_string_ser_schema,
)

from .hexadecimal import bytes_to_hex, hex_to_bytes, hex_to_uint, uint_to_hex

T = TypeVar("T", bound="FixedSizeBytes")


class ToStringSchema:
    """
    Type converter to add a simple pydantic schema that correctly
    parses and serializes the type.
    """

    @staticmethod
    def __get_pydantic_core_schema__(
        source_type: Any, handler: GetCoreSchemaHandler
    ) -> PlainValidatorFunctionSchema:
        """Call the class constructor and append the serialization schema."""
        return no_info_plain_validator_function(
            source_type,
            serialization=to_string_ser_schema(),
        )


class HexNumber(int, ToStringSchema):
    """A quantity, serialized as minimal-digit hex."""

    def __new__(cls, value: SupportsInt | str):
        """Create a new HexNumber from an integer or a wire quantity."""
        if isinstance(value, str):
            value = hex_to_uint(value)
        elif not isinstance(value, SupportsInt):
            raise ValueError(f"cannot read a quantity from {value!r}")
        number = int(value)
        if number < 0:
            raise ValueError(f"negative quantity {number}")
        return super(HexNumber, cls).__new__(cls, number)

    def __str__(self) -> str:
        """Return the wire encoding of the number."""
        return uint_to_hex(self)


class Bytes(bytes, ToStringSchema):
    """Variable-length data, serialized as 0x-prefixed hex."""

    def __new__(cls, value: bytes | str = b""):
        """Create a new Bytes object from bytes or wire data."""
        if type(value) is cls:
            return value
        if isinstance(value, str):
            value = hex_to_bytes(value)
        elif not isinstance(value, (bytes, bytearray)):
            raise ValueError(f"cannot read data from {value!r}")
        return super(Bytes, cls).__new__(cls, value)

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return super(Bytes, self).__hash__()

    def __str__(self) -> str:
        """Return the wire encoding of the bytes."""
        return bytes_to_hex(self)


class FixedSizeBytes(Bytes):
    """Data of a fixed length."""

    byte_length: ClassVar[int]

    def __class_getitem__(cls, length: int) -> Type["FixedSizeBytes"]:
        """Create a new FixedSizeBytes class with the given length."""

        class Sized(cls):  # type: ignore
            byte_length = length

        return Sized

    def __new__(cls: Type[T], value: bytes | str) -> T:
        """Create a new FixedSizeBytes object, checking its length."""
        instance = super(FixedSizeBytes, cls).__new__(cls, value)
        if len(instance) != cls.byte_length:
            raise ValueError(
                f"expected {cls.byte_length} bytes but got {len(instance)}"
            )
        return instance


class Address(FixedSizeBytes[20]):  # type: ignore
    """An account address."""

    pass


class Hash(FixedSizeBytes[32]):  # type: ignore
    """A hash or trie root."""

    pass


class Bloom(FixedSizeBytes[256]):  # type: ignore
    """A logs bloom filter."""

    pass


class HeaderNonce(FixedSizeBytes[8]):  # type: ignore
    """The proof-of-work nonce of a header."""

    pass


class RPCModel(BaseModel):
    """
    A base model that converts field names to camel case when serializing.

    Only explicitly set fields are serialized, so a field set to `None`
    appears as `null` while a field left unset is omitted altogether.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class RPCAccessListEntry(RPCModel):
    """One address of an access list with its storage keys."""

    address: Address
    storage_keys: List[Hash]


class RPCTransaction(RPCModel):
    """Transaction object as returned by `eth_getTransactionByHash`."""

    block_hash: Hash | None = None
    block_number: HexNumber | None = None
    transaction_index: HexNumber | None = None
    sender: Address = Field(..., alias="from")
    gas: HexNumber
    gas_price: HexNumber
    max_fee_per_gas: HexNumber | None = None
    max_priority_fee_per_gas: HexNumber | None = None
    max_fee_per_blob_gas: HexNumber | None = None
    blob_versioned_hashes: List[Hash] | None = None
    ty: HexNumber = Field(..., alias="type")
    access_list: List[RPCAccessListEntry] | None = None
    chain_id: HexNumber | None = None
    transaction_hash: Hash = Field(..., alias="hash")
    input: Bytes
    nonce: HexNumber
    to: Address | None = None
    value: HexNumber
    v: HexNumber
    y_parity: HexNumber | None = None
    r: HexNumber
    s: HexNumber


class RPCWithdrawal(RPCModel):
    """Withdrawal object embedded in post-Shanghai blocks."""

    index: HexNumber
    validator_index: HexNumber
    address: Address
    amount: HexNumber


class RPCBlock(RPCModel):
    """Block object as returned by `eth_getBlockByNumber`."""

    number: HexNumber
    block_hash: Hash = Field(..., alias="hash")
    parent_hash: Hash
    mix_hash: Hash
    nonce: HeaderNonce
    sha3_uncles: Hash = Field(..., alias="sha3Uncles")
    logs_bloom: Bloom
    transactions_root: Hash
    state_root: Hash
    receipts_root: Hash
    miner: Address
    difficulty: HexNumber
    total_difficulty: HexNumber
    extra_data: Bytes
    size: HexNumber | None = None
    gas_limit: HexNumber
    gas_used: HexNumber
    timestamp: HexNumber
    transactions: List[RPCTransaction] | List[Hash]
    uncles: List[Hash]
    base_fee_per_gas: HexNumber | None = None
    withdrawals_root: Hash | None = None
    withdrawals: List[RPCWithdrawal] | None = None
    blob_gas_used: HexNumber | None = None
    excess_blob_gas: HexNumber | None = None
    parent_beacon_block_root: Hash | None = None


def to_json(model: RPCModel) -> Dict[str, Any]:
    """Convert a model to its JSON data representation."""
    return model.model_dump(mode="json", by_alias=True, exclude_unset=True)


def to_json_bytes(model: RPCModel) -> bytes:
    """Serialize a model to compact UTF-8 encoded JSON."""
    return model.model_dump_json(by_alias=True, exclude_unset=True).encode(
        "utf-8"
    )
