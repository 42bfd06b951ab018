"""Configuration for the SPL Token transaction client."""

from dataclasses import dataclass, field
from typing import Optional

from solana.rpc.commitment import Commitment, Finalized
from solana.rpc.types import TxOpts
from solders.pubkey import Pubkey

from .program.constants import TOKEN_2022_PROGRAM_ID, TOKEN_PROGRAM_ID


@dataclass
class TokenClientConfig:
    """Configuration for how the client targets and submits transactions."""

    program_id: Pubkey = field(default_factory=lambda: TOKEN_PROGRAM_ID)
    skip_preflight: bool = False
    preflight_commitment: Commitment = Finalized
    max_retries: Optional[int] = None  # None = RPC node default

    @classmethod
    def default(cls) -> "TokenClientConfig":
        """Create default config (SPL Token program, preflight enabled)."""
        return cls()

    @classmethod
    def token_2022(cls) -> "TokenClientConfig":
        """Create config targeting the Token-2022 program."""
        return cls(program_id=TOKEN_2022_PROGRAM_ID)

    def with_program_id(self, program_id: Pubkey) -> "TokenClientConfig":
        """Set the token program to target."""
        self.program_id = program_id
        return self

    def with_skip_preflight(self, skip: bool = True) -> "TokenClientConfig":
        """Skip the RPC node's preflight simulation."""
        self.skip_preflight = skip
        return self

    def with_preflight_commitment(self, commitment: Commitment) -> "TokenClientConfig":
        """Set the commitment used for preflight simulation."""
        self.preflight_commitment = commitment
        return self

    def with_max_retries(self, max_retries: int) -> "TokenClientConfig":
        """Set how many times the RPC node retries forwarding a transaction."""
        self.max_retries = max_retries
        return self

    def tx_opts(self) -> TxOpts:
        """Render submission options; confirmation is never awaited here."""
        return TxOpts(
            skip_confirmation=True,
            skip_preflight=self.skip_preflight,
            preflight_commitment=self.preflight_commitment,
            max_retries=self.max_retries,
        )
