"""SPL Token SDK - Python SDK for building SPL Token instructions on Solana.

This SDK provides two modules:
- `program`: Instruction layouts, authority resolution and builders (pure)
- `client`: Async transaction client that signs and submits instructions

Example:
    from solders.keypair import Keypair
    from spl_token_sdk import Authority, build_approve_checked_instruction

    owner = Keypair()
    ix = build_approve_checked_instruction(
        account, mint, delegate, Authority.single(owner), amount=1_000, decimals=6
    )
"""

__version__ = "0.1.0"

# ============================================================================
# MODULE IMPORTS
# ============================================================================

from . import program

# ============================================================================
# CLIENT
# ============================================================================

from .client import TokenClient, unique_signers
from .config import TokenClientConfig

# ============================================================================
# CONVENIENCE RE-EXPORTS FROM PROGRAM MODULE
# ============================================================================

from .program import *  # noqa: F401,F403
from .program import __all__ as _program_all

__all__ = [
    # Version
    "__version__",
    # Modules
    "program",
    # Client
    "TokenClient",
    "TokenClientConfig",
    "unique_signers",
] + list(_program_all)
