"""Program addresses and protocol limits for the SPL Token program."""

from solders.pubkey import Pubkey

# ============================================================================
# PROGRAM IDS
# ============================================================================

TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
TOKEN_2022_PROGRAM_ID = Pubkey.from_string("TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb")
ASSOCIATED_TOKEN_PROGRAM_ID = Pubkey.from_string(
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
)
SYSTEM_PROGRAM_ID = Pubkey.from_string("11111111111111111111111111111111")
SYSVAR_RENT_PUBKEY = Pubkey.from_string("SysvarRent111111111111111111111111111111111")

# Wrapped SOL mint
NATIVE_MINT = Pubkey.from_string("So11111111111111111111111111111111111111112")

# ============================================================================
# LIMITS
# ============================================================================

# Maximum number of multisig members
MAX_SIGNERS = 11

PUBKEY_LENGTH = 32

U8_MAX = 0xFF
U64_MAX = 0xFFFFFFFFFFFFFFFF
