"""Utility functions for the SPL Token program module."""

import operator
import struct
from typing import Union

from solders.pubkey import Pubkey

from .constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    PUBKEY_LENGTH,
    TOKEN_2022_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    U64_MAX,
    U8_MAX,
)
from .errors import EncodingRangeError, LayoutMismatchError


def _as_int(value: object, name: str) -> int:
    try:
        return operator.index(value)
    except TypeError:
        raise TypeError(
            f"{name} must be an integer, got {type(value).__name__}"
        ) from None


def encode_u8(value: int, name: str = "u8") -> bytes:
    """Encode an unsigned 8-bit integer.

    Raises:
        EncodingRangeError: If value is out of range [0, 255]
    """
    value = _as_int(value, name)
    if not 0 <= value <= U8_MAX:
        raise EncodingRangeError(name, value, f"0-{U8_MAX}")
    return struct.pack("<B", value)


def encode_u64(value: int, name: str = "u64") -> bytes:
    """Encode an unsigned 64-bit integer (little-endian).

    Accepts any Python int; values that do not fit are rejected rather than
    wrapped.

    Raises:
        EncodingRangeError: If value is out of range [0, 2^64-1]
    """
    value = _as_int(value, name)
    if not 0 <= value <= U64_MAX:
        raise EncodingRangeError(name, value, f"0-{U64_MAX}")
    return struct.pack("<Q", value)


def encode_pubkey(value: Union[Pubkey, bytes], name: str = "pubkey") -> bytes:
    """Encode a Pubkey as its 32 raw bytes."""
    raw = pubkey_to_bytes(value)
    if len(raw) != PUBKEY_LENGTH:
        raise EncodingRangeError(name, value, f"{PUBKEY_LENGTH} bytes")
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
        LayoutMismatchError: If not enough bytes available for Pubkey
    """
    if offset + PUBKEY_LENGTH > len(data):
        raise LayoutMismatchError(offset + PUBKEY_LENGTH, len(data), "Pubkey")
    return Pubkey.from_bytes(data[offset : offset + PUBKEY_LENGTH])


def pubkey_to_bytes(pubkey: Union[Pubkey, bytes]) -> bytes:
    """Convert a Pubkey to bytes."""
    if isinstance(pubkey, bytes):
        return pubkey
    return bytes(pubkey)


def get_associated_token_address(
    owner: Pubkey,
    mint: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Pubkey:
    """Derive the associated token account address for a wallet and mint."""
    seeds = [
        bytes(owner),
        bytes(token_program_id),
        bytes(mint),
    ]
    pda, _ = Pubkey.find_program_address(seeds, ASSOCIATED_TOKEN_PROGRAM_ID)
    return pda


def get_associated_token_address_2022(owner: Pubkey, mint: Pubkey) -> Pubkey:
    """Derive the ATA address for Token-2022 tokens."""
    return get_associated_token_address(owner, mint, TOKEN_2022_PROGRAM_ID)
