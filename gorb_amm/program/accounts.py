"""Account deserialization for the gorb-amm SDK."""

from .constants import (
    NATIVE_POOL_SIZE,
    POOL_SIZE,
    TOKEN_ACCOUNT_AMOUNT_OFFSET,
    TOKEN_ACCOUNT_SIZE,
)
from .errors import InvalidAccountDataError
from .types import NativePoolState, PoolState
from .utils import decode_pubkey, decode_u64, decode_u8


def deserialize_pool(data: bytes) -> PoolState:
    """Deserialize a Pool account.

    Pool accounts carry no discriminator prefix.

    Layout (137 bytes):
    - [0..32]: token_a (Pubkey)
    - [32..64]: token_b (Pubkey)
    - [64]: bump (u8)
    - [65..73]: reserve_a (u64 LE)
    - [73..81]: reserve_b (u64 LE)
    - [81..89]: total_lp_supply (u64 LE)
    - [89..97]: fee_collected_a (u64 LE)
    - [97..105]: fee_collected_b (u64 LE)
    - [105..137]: fee_treasury (Pubkey)
    """
    if len(data) < POOL_SIZE:
        raise InvalidAccountDataError(
            f"Pool data too short: {len(data)} bytes (expected {POOL_SIZE})"
        )

    return PoolState(
        token_a=decode_pubkey(data, 0),
        token_b=decode_pubkey(data, 32),
        bump=decode_u8(data, 64),
        reserve_a=decode_u64(data, 65),
        reserve_b=decode_u64(data, 73),
        total_lp_supply=decode_u64(data, 81),
        fee_collected_a=decode_u64(data, 89),
        fee_collected_b=decode_u64(data, 97),
        fee_treasury=decode_pubkey(data, 105),
    )


def deserialize_native_pool(data: bytes) -> NativePoolState:
    """Deserialize a NativeSolPool account.

    Layout (169 bytes): the Pool layout with the SOL side in the ``a``
    slots, followed by
    - [137..169]: token_mint (Pubkey)
    """
    if len(data) < NATIVE_POOL_SIZE:
        raise InvalidAccountDataError(
            f"NativeSolPool data too short: {len(data)} bytes (expected {NATIVE_POOL_SIZE})"
        )

    return NativePoolState(
        token_a=decode_pubkey(data, 0),
        token_b=decode_pubkey(data, 32),
        bump=decode_u8(data, 64),
        reserve_sol=decode_u64(data, 65),
        reserve_token=decode_u64(data, 73),
        total_lp_supply=decode_u64(data, 81),
        fee_collected_sol=decode_u64(data, 89),
        fee_collected_token=decode_u64(data, 97),
        fee_treasury=decode_pubkey(data, 105),
        token_mint=decode_pubkey(data, 137),
    )


def deserialize_token_amount(data: bytes) -> int:
    """Read the ``amount`` field of an SPL token account."""
    if len(data) < TOKEN_ACCOUNT_SIZE:
        raise InvalidAccountDataError(
            f"Token account data too short: {len(data)} bytes (expected {TOKEN_ACCOUNT_SIZE})"
        )
    return decode_u64(data, TOKEN_ACCOUNT_AMOUNT_OFFSET)
