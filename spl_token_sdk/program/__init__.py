"""On-chain program interaction module for the SPL Token program.

This module provides the layout codec, authority resolution and instruction
builders for the token program. Everything here is pure and synchronous.
"""

from .authority import required_signers, resolve_authority
from .constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    MAX_SIGNERS,
    NATIVE_MINT,
    SYSTEM_PROGRAM_ID,
    SYSVAR_RENT_PUBKEY,
    TOKEN_2022_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    U64_MAX,
)
from .decode import decode_instruction
from .errors import (
    AuthorizationShapeError,
    EncodingRangeError,
    InvalidInstructionDataError,
    InvalidInstructionKeysError,
    InvalidInstructionProgramError,
    InvalidInstructionTypeError,
    LayoutError,
    LayoutMismatchError,
    TokenSdkError,
)
from .instructions import (
    ACCOUNT_TEMPLATES,
    AccountSlot,
    AccountTemplate,
    build_amount_to_ui_amount_instruction,
    build_approve_checked_instruction,
    build_approve_instruction,
    build_burn_checked_instruction,
    build_burn_instruction,
    build_close_account_instruction,
    build_create_associated_token_account_instruction,
    build_freeze_account_instruction,
    build_initialize_account2_instruction,
    build_initialize_account3_instruction,
    build_initialize_account_instruction,
    build_initialize_immutable_owner_instruction,
    build_initialize_mint2_instruction,
    build_initialize_mint_instruction,
    build_initialize_multisig2_instruction,
    build_initialize_multisig_instruction,
    build_mint_to_checked_instruction,
    build_mint_to_instruction,
    build_revoke_instruction,
    build_set_authority_instruction,
    build_sync_native_instruction,
    build_thaw_account_instruction,
    build_token_instruction,
    build_transfer_checked_instruction,
    build_transfer_instruction,
    get_account_template,
)
from .layout import (
    INSTRUCTION_LAYOUTS,
    Field,
    FieldType,
    Layout,
    declared_span,
    decode_instruction_data,
    encode_instruction_data,
    get_layout,
)
from .types import (
    Authority,
    AuthorityKind,
    AuthorityType,
    AuthorizedAccounts,
    DecodedInstruction,
    Signer,
    TokenInstruction,
)
from .utils import get_associated_token_address, get_associated_token_address_2022

__all__ = [
    # Constants
    "TOKEN_PROGRAM_ID",
    "TOKEN_2022_PROGRAM_ID",
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "SYSTEM_PROGRAM_ID",
    "SYSVAR_RENT_PUBKEY",
    "NATIVE_MINT",
    "MAX_SIGNERS",
    "U64_MAX",
    # Types
    "TokenInstruction",
    "AuthorityType",
    "AuthorityKind",
    "Authority",
    "AuthorizedAccounts",
    "DecodedInstruction",
    "Signer",
    # Errors
    "TokenSdkError",
    "LayoutError",
    "EncodingRangeError",
    "LayoutMismatchError",
    "AuthorizationShapeError",
    "InvalidInstructionProgramError",
    "InvalidInstructionKeysError",
    "InvalidInstructionDataError",
    "InvalidInstructionTypeError",
    # Layout Codec
    "Field",
    "FieldType",
    "Layout",
    "INSTRUCTION_LAYOUTS",
    "get_layout",
    "declared_span",
    "encode_instruction_data",
    "decode_instruction_data",
    # Authority Resolution
    "resolve_authority",
    "required_signers",
    # Instruction Builders
    "AccountSlot",
    "AccountTemplate",
    "ACCOUNT_TEMPLATES",
    "get_account_template",
    "build_token_instruction",
    "build_initialize_mint_instruction",
    "build_initialize_mint2_instruction",
    "build_initialize_account_instruction",
    "build_initialize_account2_instruction",
    "build_initialize_account3_instruction",
    "build_initialize_multisig_instruction",
    "build_initialize_multisig2_instruction",
    "build_initialize_immutable_owner_instruction",
    "build_transfer_instruction",
    "build_transfer_checked_instruction",
    "build_approve_instruction",
    "build_approve_checked_instruction",
    "build_revoke_instruction",
    "build_set_authority_instruction",
    "build_mint_to_instruction",
    "build_mint_to_checked_instruction",
    "build_burn_instruction",
    "build_burn_checked_instruction",
    "build_amount_to_ui_amount_instruction",
    "build_close_account_instruction",
    "build_freeze_account_instruction",
    "build_thaw_account_instruction",
    "build_sync_native_instruction",
    "build_create_associated_token_account_instruction",
    # Decoding
    "decode_instruction",
    # Utils
    "get_associated_token_address",
    "get_associated_token_address_2022",
]
