"""Async transaction client for the SPL Token program."""

import logging
from typing import Dict, List, Optional, Sequence

from solana.rpc.async_api import AsyncClient
from solders.hash import Hash
from solders.instruction import Instruction
from solders.message import Message
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction

from .config import TokenClientConfig
from .program.authority import required_signers
from .program.instructions import (
    build_approve_checked_instruction,
    build_approve_instruction,
    build_burn_checked_instruction,
    build_burn_instruction,
    build_close_account_instruction,
    build_create_associated_token_account_instruction,
    build_freeze_account_instruction,
    build_mint_to_checked_instruction,
    build_mint_to_instruction,
    build_revoke_instruction,
    build_set_authority_instruction,
    build_sync_native_instruction,
    build_thaw_account_instruction,
    build_transfer_checked_instruction,
    build_transfer_instruction,
)
from .program.types import Authority, AuthorityType, Signer

logger = logging.getLogger(__name__)


def unique_signers(payer: Signer, signers: Sequence[Signer]) -> List[Signer]:
    """Order signers payer first, dropping repeats of the same pubkey."""
    seen: Dict[Pubkey, Signer] = {}
    for signer in (payer, *signers):
        seen.setdefault(signer.pubkey(), signer)
    return list(seen.values())


class TokenClient:
    """Async client that wraps token instructions in transactions and submits them.

    Every operation returns the signature of the submitted transaction.
    Confirmation is left to the caller.
    """

    def __init__(
        self,
        connection: AsyncClient,
        config: Optional[TokenClientConfig] = None,
    ):
        """Initialize the client.

        Args:
            connection: Solana RPC async client
            config: Submission settings (defaults to the SPL Token program)
        """
        self.connection = connection
        self.config = config or TokenClientConfig.default()

    @property
    def program_id(self) -> Pubkey:
        return self.config.program_id

    # =========================================================================
    # Token Operations
    # =========================================================================

    async def transfer(
        self,
        payer: Signer,
        source: Pubkey,
        destination: Pubkey,
        owner: Authority,
        amount: int,
        multi_signers: Sequence[Signer] = (),
    ) -> Signature:
        """Transfer tokens from one account to another."""
        ix = build_transfer_instruction(
            source, destination, owner, amount, multi_signers, self.program_id
        )
        return await self._send(ix, payer, owner, multi_signers)

    async def transfer_checked(
        self,
        payer: Signer,
        source: Pubkey,
        mint: Pubkey,
        destination: Pubkey,
        owner: Authority,
        amount: int,
        decimals: int,
        multi_signers: Sequence[Signer] = (),
    ) -> Signature:
        """Transfer tokens, asserting the mint and its decimals."""
        ix = build_transfer_checked_instruction(
            source,
            mint,
            destination,
            owner,
            amount,
            decimals,
            multi_signers,
            self.program_id,
        )
        return await self._send(ix, payer, owner, multi_signers)

    async def approve(
        self,
        payer: Signer,
        account: Pubkey,
        delegate: Pubkey,
        owner: Authority,
        amount: int,
        multi_signers: Sequence[Signer] = (),
    ) -> Signature:
        """Grant a delegate permission to transfer up to ``amount`` tokens."""
        ix = build_approve_instruction(
            account, delegate, owner, amount, multi_signers, self.program_id
        )
        return await self._send(ix, payer, owner, multi_signers)

    async def approve_checked(
        self,
        payer: Signer,
        account: Pubkey,
        mint: Pubkey,
        delegate: Pubkey,
        owner: Authority,
        amount: int,
        decimals: int,
        multi_signers: Sequence[Signer] = (),
    ) -> Signature:
        """Grant a delegate permission, asserting the mint and its decimals."""
        ix = build_approve_checked_instruction(
            account,
            mint,
            delegate,
            owner,
            amount,
            decimals,
            multi_signers,
            self.program_id,
        )
        return await self._send(ix, payer, owner, multi_signers)

    async def revoke(
        self,
        payer: Signer,
        account: Pubkey,
        owner: Authority,
        multi_signers: Sequence[Signer] = (),
    ) -> Signature:
        """Revoke the delegate of an account."""
        ix = build_revoke_instruction(account, owner, multi_signers, self.program_id)
        return await self._send(ix, payer, owner, multi_signers)

    async def set_authority(
        self,
        payer: Signer,
        account: Pubkey,
        current_authority: Authority,
        authority_type: AuthorityType,
        new_authority: Optional[Pubkey],
        multi_signers: Sequence[Signer] = (),
    ) -> Signature:
        """Assign a new authority to a mint or account (None removes it)."""
        ix = build_set_authority_instruction(
            account,
            current_authority,
            authority_type,
            new_authority,
            multi_signers,
            self.program_id,
        )
        return await self._send(ix, payer, current_authority, multi_signers)

    async def mint_to(
        self,
        payer: Signer,
        mint: Pubkey,
        destination: Pubkey,
        authority: Authority,
        amount: int,
        multi_signers: Sequence[Signer] = (),
    ) -> Signature:
        """Mint new tokens to an account."""
        ix = build_mint_to_instruction(
            mint, destination, authority, amount, multi_signers, self.program_id
        )
        return await self._send(ix, payer, authority, multi_signers)

    async def mint_to_checked(
        self,
        payer: Signer,
        mint: Pubkey,
        destination: Pubkey,
        authority: Authority,
        amount: int,
        decimals: int,
        multi_signers: Sequence[Signer] = (),
    ) -> Signature:
        """Mint new tokens, asserting the mint's decimals."""
        ix = build_mint_to_checked_instruction(
            mint,
            destination,
            authority,
            amount,
            decimals,
            multi_signers,
            self.program_id,
        )
        return await self._send(ix, payer, authority, multi_signers)

    async def burn(
        self,
        payer: Signer,
        account: Pubkey,
        mint: Pubkey,
        owner: Authority,
        amount: int,
        multi_signers: Sequence[Signer] = (),
    ) -> Signature:
        """Burn tokens from an account."""
        ix = build_burn_instruction(
            account, mint, owner, amount, multi_signers, self.program_id
        )
        return await self._send(ix, payer, owner, multi_signers)

    async def burn_checked(
        self,
        payer: Signer,
        account: Pubkey,
        mint: Pubkey,
        owner: Authority,
        amount: int,
        decimals: int,
        multi_signers: Sequence[Signer] = (),
    ) -> Signature:
        """Burn tokens, asserting the mint's decimals."""
        ix = build_burn_checked_instruction(
            account, mint, owner, amount, decimals, multi_signers, self.program_id
        )
        return await self._send(ix, payer, owner, multi_signers)

    async def close_account(
        self,
        payer: Signer,
        account: Pubkey,
        destination: Pubkey,
        authority: Authority,
        multi_signers: Sequence[Signer] = (),
    ) -> Signature:
        """Close a token account, sending its lamports to ``destination``."""
        ix = build_close_account_instruction(
            account, destination, authority, multi_signers, self.program_id
        )
        return await self._send(ix, payer, authority, multi_signers)

    async def freeze_account(
        self,
        payer: Signer,
        account: Pubkey,
        mint: Pubkey,
        authority: Authority,
        multi_signers: Sequence[Signer] = (),
    ) -> Signature:
        """Freeze a token account."""
        ix = build_freeze_account_instruction(
            account, mint, authority, multi_signers, self.program_id
        )
        return await self._send(ix, payer, authority, multi_signers)

    async def thaw_account(
        self,
        payer: Signer,
        account: Pubkey,
        mint: Pubkey,
        authority: Authority,
        multi_signers: Sequence[Signer] = (),
    ) -> Signature:
        """Thaw a frozen token account."""
        ix = build_thaw_account_instruction(
            account, mint, authority, multi_signers, self.program_id
        )
        return await self._send(ix, payer, authority, multi_signers)

    async def sync_native(self, payer: Signer, account: Pubkey) -> Signature:
        """Sync a wrapped SOL account's token amount with its lamports."""
        ix = build_sync_native_instruction(account, self.program_id)
        return await self.send_instructions([ix], payer)

    async def create_associated_token_account(
        self,
        payer: Signer,
        owner: Pubkey,
        mint: Pubkey,
        idempotent: bool = False,
    ) -> Signature:
        """Create the associated token account for an owner and mint."""
        ix = build_create_associated_token_account_instruction(
            payer.pubkey(), owner, mint, idempotent, self.program_id
        )
        return await self.send_instructions([ix], payer)

    # =========================================================================
    # Transactions
    # =========================================================================

    async def build_transaction(
        self,
        instructions: Sequence[Instruction],
        payer: Signer,
        signers: Sequence[Signer] = (),
    ) -> Transaction:
        """Build a transaction paid for by ``payer`` and signed by all signers."""
        blockhash = await self._get_blockhash()
        message = Message.new_with_blockhash(list(instructions), payer.pubkey(), blockhash)
        return Transaction(unique_signers(payer, signers), message, blockhash)

    async def send_instructions(
        self,
        instructions: Sequence[Instruction],
        payer: Signer,
        signers: Sequence[Signer] = (),
    ) -> Signature:
        """Build, sign and submit a transaction without awaiting confirmation."""
        transaction = await self.build_transaction(instructions, payer, signers)
        response = await self.connection.send_raw_transaction(
            bytes(transaction), opts=self.config.tx_opts()
        )
        signature = response.value
        logger.info(f"Submitted token transaction: {signature}")
        return signature

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    async def _send(
        self,
        instruction: Instruction,
        payer: Signer,
        authority: Authority,
        multi_signers: Sequence[Signer],
    ) -> Signature:
        signers = required_signers(authority, multi_signers)
        return await self.send_instructions([instruction], payer, signers)

    async def _get_blockhash(self) -> Hash:
        """Get the latest blockhash."""
        response = await self.connection.get_latest_blockhash()
        blockhash = response.value.blockhash
        logger.debug(f"Using blockhash {blockhash}")
        return blockhash
