"""Utility functions for the gorb-amm program module."""

import json
import struct
from pathlib import Path
from typing import Union

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .constants import ASSOCIATED_TOKEN_PROGRAM_ID, MAX_U64, PUBKEY_SIZE, TOKEN_PROGRAM_ID


def encode_u8(value: int) -> bytes:
    """Encode an unsigned 8-bit integer.

    Raises:
        ValueError: If value is out of range [0, 255]
    """
    if not 0 <= value <= 255:
        raise ValueError(f"u8 value out of range: {value} (must be 0-255)")
    return struct.pack("<B", value)


def encode_u64(value: int) -> bytes:
    """Encode an unsigned 64-bit integer (little-endian).

    Raises:
        ValueError: If value is out of range [0, 2^64-1]
    """
    if not 0 <= value <= MAX_U64:
        raise ValueError(f"u64 value out of range: {value} (must be 0-{MAX_U64})")
    return struct.pack("<Q", value)


def encode_bool(value: bool) -> bytes:
    """Encode a boolean as a single byte (Borsh: 0 or 1)."""
    return b"\x01" if value else b"\x00"


def encode_pubkey(value) -> bytes:
    """Encode a Pubkey (or its raw bytes) as exactly 32 bytes.

    Raises:
        ValueError: If the raw value is not 32 bytes long
    """
    raw = bytes(value)
    if len(raw) != PUBKEY_SIZE:
        raise ValueError(f"Pubkey must be {PUBKEY_SIZE} bytes, got {len(raw)}")
    return raw


def decode_u8(data: bytes, offset: int = 0) -> int:
    """Decode an unsigned 8-bit integer."""
    return struct.unpack_from("<B", data, offset)[0]


def decode_u64(data: bytes, offset: int = 0) -> int:
    """Decode an unsigned 64-bit integer (little-endian)."""
    return struct.unpack_from("<Q", data, offset)[0]


def decode_pubkey(data: bytes, offset: int = 0) -> Pubkey:
    """Decode a Pubkey from 32 bytes.

    Raises:
        ValueError: If not enough bytes available for Pubkey
    """
    if offset + PUBKEY_SIZE > len(data):
        raise ValueError(
            f"Not enough bytes for Pubkey at offset {offset}: "
            f"need 32 bytes, have {len(data) - offset}"
        )
    return Pubkey.from_bytes(data[offset : offset + PUBKEY_SIZE])


def decode_bool(data: bytes, offset: int = 0) -> bool:
    """Decode a strict Borsh boolean from a single byte.

    Raises:
        ValueError: If not enough bytes available or the byte is not 0/1
    """
    if offset >= len(data):
        raise ValueError(f"Not enough bytes for bool at offset {offset}")
    value = data[offset]
    if value > 1:
        raise ValueError(f"Invalid bool byte at offset {offset}: {value}")
    return value == 1


def pubkey_to_bytes(pubkey: Union[Pubkey, bytes]) -> bytes:
    """Convert a Pubkey to bytes."""
    if isinstance(pubkey, bytes):
        return pubkey
    return bytes(pubkey)


def get_associated_token_address(
    owner: Pubkey,
    mint: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
    associated_token_program_id: Pubkey = ASSOCIATED_TOKEN_PROGRAM_ID,
) -> Pubkey:
    """Derive the associated token account address for a wallet and mint."""
    seeds = [
        bytes(owner),
        bytes(token_program_id),
        bytes(mint),
    ]
    pda, _ = Pubkey.find_program_address(seeds, associated_token_program_id)
    return pda


def load_keypair(path: Union[str, Path]) -> Keypair:
    """Load a keypair from a Solana CLI JSON file (array of 64 bytes)."""
    with open(path, "r") as f:
        secret = json.load(f)
    return Keypair.from_bytes(bytes(secret))
