"""Tests for instruction decoding."""

import pytest
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from spl_token_sdk import (
    TOKEN_2022_PROGRAM_ID,
    Authority,
    AuthorityType,
    InvalidInstructionKeysError,
    InvalidInstructionProgramError,
    InvalidInstructionTypeError,
    LayoutMismatchError,
    TokenInstruction,
    build_approve_checked_instruction,
    build_initialize_multisig_instruction,
    build_set_authority_instruction,
    build_sync_native_instruction,
    build_transfer_instruction,
    decode_instruction,
)


class TestDecodeInstruction:
    def test_approve_checked_single(self, owner):
        account = Pubkey.new_unique()
        mint = Pubkey.new_unique()
        delegate = Pubkey.new_unique()
        ix = build_approve_checked_instruction(
            account, mint, delegate, Authority.single(owner), 500, 6
        )

        decoded = decode_instruction(ix)

        assert decoded.kind == TokenInstruction.APPROVE_CHECKED
        assert decoded.data == {"amount": 500, "decimals": 6}
        assert decoded.accounts["account"].pubkey == account
        assert decoded.accounts["mint"].pubkey == mint
        assert decoded.accounts["delegate"].pubkey == delegate
        assert decoded.accounts["owner"].pubkey == owner.pubkey()
        assert decoded.accounts["owner"].is_signer
        assert decoded.multi_signers == []

    def test_approve_checked_multisig(self, multisig, members):
        ix = build_approve_checked_instruction(
            Pubkey.new_unique(),
            Pubkey.new_unique(),
            Pubkey.new_unique(),
            Authority.multisig(multisig),
            500,
            6,
            multi_signers=members,
        )

        decoded = decode_instruction(ix)

        assert decoded.accounts["owner"].pubkey == multisig
        assert not decoded.accounts["owner"].is_signer
        assert [m.pubkey for m in decoded.multi_signers] == [m.pubkey() for m in members]
        assert all(m.is_signer for m in decoded.multi_signers)

    def test_set_authority_none(self, single_authority):
        ix = build_set_authority_instruction(
            Pubkey.new_unique(), single_authority, AuthorityType.FREEZE_ACCOUNT, None
        )

        decoded = decode_instruction(ix)

        assert decoded.accounts["current_authority"].is_signer
        assert decoded.data == {"authority_type": 1, "new_authority": None}

    def test_initialize_multisig_members(self):
        members = [Pubkey.new_unique() for _ in range(3)]
        ix = build_initialize_multisig_instruction(Pubkey.new_unique(), members, 2)

        decoded = decode_instruction(ix)

        assert decoded.kind == TokenInstruction.INITIALIZE_MULTISIG
        assert set(decoded.accounts) == {"account", "rent"}
        assert [m.pubkey for m in decoded.multi_signers] == members
        assert decoded.data == {"m": 2}

    def test_custom_program_id(self, single_authority):
        ix = build_transfer_instruction(
            Pubkey.new_unique(),
            Pubkey.new_unique(),
            single_authority,
            1,
            program_id=TOKEN_2022_PROGRAM_ID,
        )

        decoded = decode_instruction(ix, TOKEN_2022_PROGRAM_ID)

        assert decoded.program_id == TOKEN_2022_PROGRAM_ID


class TestDecodeErrors:
    def test_wrong_program(self, single_authority):
        ix = build_transfer_instruction(
            Pubkey.new_unique(), Pubkey.new_unique(), single_authority, 1
        )

        with pytest.raises(InvalidInstructionProgramError):
            decode_instruction(ix, TOKEN_2022_PROGRAM_ID)

    def test_too_few_accounts(self, single_authority):
        ix = build_transfer_instruction(
            Pubkey.new_unique(), Pubkey.new_unique(), single_authority, 1
        )
        truncated = Instruction(
            program_id=ix.program_id, data=bytes(ix.data), accounts=ix.accounts[:2]
        )

        with pytest.raises(InvalidInstructionKeysError):
            decode_instruction(truncated)

    def test_extra_accounts_without_authority(self):
        ix = build_sync_native_instruction(Pubkey.new_unique())
        extra = AccountMeta(pubkey=Pubkey.new_unique(), is_signer=False, is_writable=False)
        padded = Instruction(
            program_id=ix.program_id,
            data=bytes(ix.data),
            accounts=ix.accounts + [extra],
        )

        with pytest.raises(InvalidInstructionKeysError):
            decode_instruction(padded)

    def test_bad_data_length(self, single_authority):
        ix = build_transfer_instruction(
            Pubkey.new_unique(), Pubkey.new_unique(), single_authority, 1
        )
        corrupted = Instruction(
            program_id=ix.program_id, data=bytes(ix.data)[:5], accounts=ix.accounts
        )

        with pytest.raises(LayoutMismatchError):
            decode_instruction(corrupted)

    def test_unknown_kind(self):
        ix = build_sync_native_instruction(Pubkey.new_unique())
        unknown = Instruction(
            program_id=ix.program_id, data=bytes([21]), accounts=ix.accounts
        )

        with pytest.raises(InvalidInstructionTypeError):
            decode_instruction(unknown)

    def test_accounts_after_signing_authority(self, single_authority):
        ix = build_transfer_instruction(
            Pubkey.new_unique(), Pubkey.new_unique(), single_authority, 1
        )
        extra = AccountMeta(pubkey=Pubkey.new_unique(), is_signer=True, is_writable=False)
        padded = Instruction(
            program_id=ix.program_id,
            data=bytes(ix.data),
            accounts=ix.accounts + [extra],
        )

        with pytest.raises(InvalidInstructionKeysError):
            decode_instruction(padded)

    def test_unsigned_multisig_signer(self, multisig, members):
        ix = build_transfer_instruction(
            Pubkey.new_unique(),
            Pubkey.new_unique(),
            Authority.multisig(multisig),
            1,
            multi_signers=members,
        )
        accounts = list(ix.accounts)
        accounts[-1] = AccountMeta(
            pubkey=accounts[-1].pubkey, is_signer=False, is_writable=False
        )
        tampered = Instruction(
            program_id=ix.program_id, data=bytes(ix.data), accounts=accounts
        )

        with pytest.raises(InvalidInstructionKeysError):
            decode_instruction(tampered)

    def test_multisig_without_signers(self, multisig, members):
        ix = build_transfer_instruction(
            Pubkey.new_unique(),
            Pubkey.new_unique(),
            Authority.multisig(multisig),
            1,
            multi_signers=members,
        )
        truncated = Instruction(
            program_id=ix.program_id, data=bytes(ix.data), accounts=ix.accounts[:3]
        )

        with pytest.raises(InvalidInstructionKeysError):
            decode_instruction(truncated)
