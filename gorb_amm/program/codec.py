"""Instruction data encoding and decoding for the AMM program.

Every instruction is a single discriminator byte followed by a fixed
sequence of fields. Nothing is length-prefixed, so the total size of a
payload is known from its kind alone.
"""

from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union

from .constants import DISCRIMINATOR_SIZE, PUBKEY_SIZE, U64_SIZE
from .errors import (
    DiscriminatorCollisionError,
    MalformedPayload,
    UnsupportedInstructionError,
)
from .types import (
    AddLiquidityData,
    AddLiquidityNativeSolData,
    CollectFeesData,
    FindPoolsByTokenData,
    InitNativeSolPoolData,
    InitPoolData,
    InstructionKind,
    MultihopSwapData,
    RemoveLiquidityData,
    RemoveLiquidityNativeSolData,
    SetFeeTreasuryData,
    SwapData,
    SwapNativeSolToTokenData,
    SwapTokenToNativeSolData,
    WithdrawFeesData,
)
from .utils import (
    decode_bool,
    decode_pubkey,
    decode_u64,
    decode_u8,
    encode_bool,
    encode_pubkey,
    encode_u64,
    encode_u8,
)

InstructionData = Union[
    InitPoolData,
    AddLiquidityData,
    RemoveLiquidityData,
    SwapData,
    MultihopSwapData,
    CollectFeesData,
    WithdrawFeesData,
    SetFeeTreasuryData,
    FindPoolsByTokenData,
    InitNativeSolPoolData,
    SwapNativeSolToTokenData,
    SwapTokenToNativeSolData,
    AddLiquidityNativeSolData,
    RemoveLiquidityNativeSolData,
]

# Field type tags
PUBKEY = "pubkey"
U64 = "u64"
U8 = "u8"
BOOL = "bool"

FIELD_SIZES = {PUBKEY: PUBKEY_SIZE, U64: U64_SIZE, U8: 1, BOOL: 1}

# Field layout per payload type, in wire order
LAYOUTS: Dict[type, Tuple[Tuple[str, str], ...]] = {
    InitPoolData: (
        ("token_a", PUBKEY),
        ("token_b", PUBKEY),
        ("amount_a", U64),
        ("amount_b", U64),
        ("bump", U8),
    ),
    AddLiquidityData: (("amount_a", U64), ("amount_b", U64)),
    RemoveLiquidityData: (("lp_amount", U64),),
    SwapData: (("amount_in", U64), ("direction_a_to_b", BOOL)),
    MultihopSwapData: (("amount_in", U64), ("minimum_amount_out", U64)),
    CollectFeesData: (("pool", PUBKEY),),
    WithdrawFeesData: (("pool", PUBKEY), ("amount_a", U64), ("amount_b", U64)),
    SetFeeTreasuryData: (("pool", PUBKEY), ("treasury", PUBKEY)),
    FindPoolsByTokenData: (("token", PUBKEY),),
    InitNativeSolPoolData: (("amount_sol", U64), ("amount_token", U64)),
    SwapNativeSolToTokenData: (("amount_in", U64), ("minimum_amount_out", U64)),
    SwapTokenToNativeSolData: (("amount_in", U64), ("minimum_amount_out", U64)),
    AddLiquidityNativeSolData: (("amount_sol", U64), ("amount_token", U64)),
    RemoveLiquidityNativeSolData: (("lp_amount", U64),),
}

PAYLOAD_TYPES: Dict[InstructionKind, type] = {cls.KIND: cls for cls in LAYOUTS}


@dataclass(frozen=True)
class DiscriminatorTable:
    """Discriminator bytes of one deployed program build.

    Different deployments of the AMM program number their instruction enum
    differently (index 8 is SetFeeTreasury in the fee-enabled build and
    FindPoolsByToken in the query build), so the table is chosen per target
    rather than assumed global.
    """

    name: str
    discriminators: Mapping[InstructionKind, int]

    def __post_init__(self):
        seen: Dict[int, InstructionKind] = {}
        for kind, value in self.discriminators.items():
            if not 0 <= value <= 255:
                raise ValueError(f"Discriminator out of range for {kind.value}: {value}")
            if value in seen:
                raise DiscriminatorCollisionError(value, seen[value].value, kind.value)
            seen[value] = kind
        object.__setattr__(self, "discriminators", MappingProxyType(dict(self.discriminators)))
        object.__setattr__(self, "_by_value", MappingProxyType(seen))

    def discriminator(self, kind: InstructionKind) -> int:
        """Get the discriminator byte of ``kind``.

        Raises:
            UnsupportedInstructionError: If this build has no such instruction
        """
        try:
            return self.discriminators[kind]
        except KeyError:
            raise UnsupportedInstructionError(kind.value, self.name) from None

    def kind(self, discriminator: int) -> Optional[InstructionKind]:
        """Look up the instruction kind for a discriminator byte."""
        return self._by_value.get(discriminator)

    def supports(self, kind: InstructionKind) -> bool:
        return kind in self.discriminators


FEE_PROGRAM_DISCRIMINATORS = DiscriminatorTable(
    name="fee",
    discriminators={
        InstructionKind.INIT_POOL: 0,
        InstructionKind.ADD_LIQUIDITY: 1,
        InstructionKind.REMOVE_LIQUIDITY: 2,
        InstructionKind.SWAP: 3,
        InstructionKind.MULTIHOP_SWAP: 4,
        InstructionKind.COLLECT_FEES: 6,
        InstructionKind.WITHDRAW_FEES: 7,
        InstructionKind.SET_FEE_TREASURY: 8,
        InstructionKind.SWAP_NATIVE_SOL_TO_TOKEN: 12,
    },
)

QUERY_PROGRAM_DISCRIMINATORS = DiscriminatorTable(
    name="query",
    discriminators={
        InstructionKind.INIT_POOL: 0,
        InstructionKind.ADD_LIQUIDITY: 1,
        InstructionKind.REMOVE_LIQUIDITY: 2,
        InstructionKind.SWAP: 3,
        InstructionKind.MULTIHOP_SWAP: 4,
        InstructionKind.FIND_POOLS_BY_TOKEN: 8,
        InstructionKind.INIT_NATIVE_SOL_POOL: 11,
        InstructionKind.SWAP_NATIVE_SOL_TO_TOKEN: 12,
        InstructionKind.SWAP_TOKEN_TO_NATIVE_SOL: 13,
        InstructionKind.ADD_LIQUIDITY_NATIVE_SOL: 14,
        InstructionKind.REMOVE_LIQUIDITY_NATIVE_SOL: 15,
    },
)

DEFAULT_DISCRIMINATORS = FEE_PROGRAM_DISCRIMINATORS

PROGRAM_BUILDS: Dict[str, DiscriminatorTable] = {
    table.name: table
    for table in (FEE_PROGRAM_DISCRIMINATORS, QUERY_PROGRAM_DISCRIMINATORS)
}


def payload_size(kind: InstructionKind) -> int:
    """Total encoded size of ``kind``, discriminator included."""
    layout = LAYOUTS[PAYLOAD_TYPES[kind]]
    return DISCRIMINATOR_SIZE + sum(FIELD_SIZES[tag] for _, tag in layout)


def _encode_field(tag: str, value) -> bytes:
    if tag == PUBKEY:
        return encode_pubkey(value)
    if tag == U64:
        return encode_u64(value)
    if tag == U8:
        return encode_u8(value)
    return encode_bool(value)


def _decode_field(tag: str, data: bytes, offset: int):
    if tag == PUBKEY:
        return decode_pubkey(data, offset)
    if tag == U64:
        return decode_u64(data, offset)
    if tag == U8:
        return decode_u8(data, offset)
    return decode_bool(data, offset)


def encode(
    payload: InstructionData,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
) -> bytes:
    """Encode an instruction payload into the program's wire layout.

    Raises:
        UnsupportedInstructionError: If ``table`` has no discriminator for it
        ValueError: If an integer field is out of range or a pubkey field
            is not 32 bytes
    """
    layout = LAYOUTS[type(payload)]

    data = bytearray(payload_size(payload.KIND))
    data[0] = table.discriminator(payload.KIND)
    offset = DISCRIMINATOR_SIZE
    for name, tag in layout:
        size = FIELD_SIZES[tag]
        data[offset : offset + size] = _encode_field(tag, getattr(payload, name))
        offset += size

    return bytes(data)


def decode(
    data: bytes,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
) -> InstructionData:
    """Decode instruction data back into its payload.

    Raises:
        MalformedPayload: If the buffer is empty, the discriminator is unknown
            to ``table``, the length does not match exactly, or a bool field
            holds a byte other than 0 or 1
    """
    if not data:
        raise MalformedPayload("empty instruction data")

    kind = table.kind(data[0])
    if kind is None:
        raise MalformedPayload(
            f"unknown discriminator {data[0]} for program build '{table.name}'"
        )

    expected = payload_size(kind)
    if len(data) != expected:
        raise MalformedPayload(
            f"{kind.value} expects {expected} bytes, got {len(data)}"
        )

    payload_type = PAYLOAD_TYPES[kind]
    values = {}
    offset = DISCRIMINATOR_SIZE
    for name, tag in LAYOUTS[payload_type]:
        try:
            values[name] = _decode_field(tag, data, offset)
        except ValueError as e:
            raise MalformedPayload(f"{kind.value}.{name}: {e}") from e
        offset += FIELD_SIZES[tag]

    return payload_type(**values)


def payload_fields(payload: InstructionData) -> Dict[str, object]:
    """Field values of a payload, in wire order."""
    return {f.name: getattr(payload, f.name) for f in fields(payload)}
