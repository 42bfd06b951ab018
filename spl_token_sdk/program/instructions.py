"""Instruction builders for the SPL Token program.

Every builder is a thin wrapper over ``build_token_instruction``, which pairs
the account template of an instruction kind with its data layout and the
resolved authority.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from .authority import resolve_authority
from .constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    MAX_SIGNERS,
    SYSTEM_PROGRAM_ID,
    SYSVAR_RENT_PUBKEY,
    TOKEN_PROGRAM_ID,
)
from .errors import (
    AuthorizationShapeError,
    InvalidInstructionKeysError,
    InvalidInstructionTypeError,
)
from .layout import encode_instruction_data
from .types import Authority, AuthorityType, Signer, TokenInstruction
from .utils import get_associated_token_address


@dataclass(frozen=True)
class AccountSlot:
    """A fixed position in an instruction's account list."""

    name: str
    is_writable: bool = False


@dataclass(frozen=True)
class AccountTemplate:
    """Account list contract of one instruction kind.

    ``authority`` names the slot filled by authority resolution, which always
    follows the base slots. ``members`` marks kinds that end in a variable
    list of read-only multisig member keys.
    """

    slots: Tuple[AccountSlot, ...]
    authority: Optional[str] = None
    members: bool = False

    @property
    def names(self) -> List[str]:
        return [slot.name for slot in self.slots]


def _w(name: str) -> AccountSlot:
    return AccountSlot(name, is_writable=True)


def _r(name: str) -> AccountSlot:
    return AccountSlot(name)


ACCOUNT_TEMPLATES: Dict[TokenInstruction, AccountTemplate] = {
    TokenInstruction.INITIALIZE_MINT: AccountTemplate((_w("mint"), _r("rent"))),
    TokenInstruction.INITIALIZE_ACCOUNT: AccountTemplate(
        (_w("account"), _r("mint"), _r("owner"), _r("rent"))
    ),
    TokenInstruction.INITIALIZE_MULTISIG: AccountTemplate(
        (_w("account"), _r("rent")), members=True
    ),
    TokenInstruction.TRANSFER: AccountTemplate(
        (_w("source"), _w("destination")), authority="owner"
    ),
    TokenInstruction.APPROVE: AccountTemplate(
        (_w("account"), _r("delegate")), authority="owner"
    ),
    TokenInstruction.REVOKE: AccountTemplate((_w("account"),), authority="owner"),
    TokenInstruction.SET_AUTHORITY: AccountTemplate(
        (_w("account"),), authority="current_authority"
    ),
    TokenInstruction.MINT_TO: AccountTemplate(
        (_w("mint"), _w("destination")), authority="authority"
    ),
    TokenInstruction.BURN: AccountTemplate(
        (_w("account"), _w("mint")), authority="owner"
    ),
    TokenInstruction.CLOSE_ACCOUNT: AccountTemplate(
        (_w("account"), _w("destination")), authority="authority"
    ),
    TokenInstruction.FREEZE_ACCOUNT: AccountTemplate(
        (_w("account"), _r("mint")), authority="authority"
    ),
    TokenInstruction.THAW_ACCOUNT: AccountTemplate(
        (_w("account"), _r("mint")), authority="authority"
    ),
    TokenInstruction.TRANSFER_CHECKED: AccountTemplate(
        (_w("source"), _r("mint"), _w("destination")), authority="owner"
    ),
    TokenInstruction.APPROVE_CHECKED: AccountTemplate(
        (_w("account"), _r("mint"), _r("delegate")), authority="owner"
    ),
    TokenInstruction.MINT_TO_CHECKED: AccountTemplate(
        (_w("mint"), _w("destination")), authority="authority"
    ),
    TokenInstruction.BURN_CHECKED: AccountTemplate(
        (_w("account"), _w("mint")), authority="owner"
    ),
    TokenInstruction.INITIALIZE_ACCOUNT2: AccountTemplate(
        (_w("account"), _r("mint"), _r("rent"))
    ),
    TokenInstruction.SYNC_NATIVE: AccountTemplate((_w("account"),)),
    TokenInstruction.INITIALIZE_ACCOUNT3: AccountTemplate((_w("account"), _r("mint"))),
    TokenInstruction.INITIALIZE_MULTISIG2: AccountTemplate((_w("account"),), members=True),
    TokenInstruction.INITIALIZE_MINT2: AccountTemplate((_w("mint"),)),
    TokenInstruction.INITIALIZE_IMMUTABLE_OWNER: AccountTemplate((_w("account"),)),
    TokenInstruction.AMOUNT_TO_UI_AMOUNT: AccountTemplate((_r("mint"),)),
}


def get_account_template(kind: TokenInstruction) -> AccountTemplate:
    """Look up the account template of an instruction kind.

    Raises:
        InvalidInstructionTypeError: If the kind cannot be built
    """
    try:
        return ACCOUNT_TEMPLATES[TokenInstruction(kind)]
    except (KeyError, ValueError):
        raise InvalidInstructionTypeError(int(kind)) from None


def build_token_instruction(
    kind: TokenInstruction,
    accounts: Mapping[str, Pubkey],
    data: Optional[Mapping[str, Any]] = None,
    authority: Optional[Authority] = None,
    multi_signers: Sequence[Signer] = (),
    members: Sequence[Pubkey] = (),
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Assemble any token instruction from its parts.

    Args:
        kind: Instruction discriminant
        accounts: Pubkey for every base slot of the kind's template, by name
        data: Field values for the kind's layout, excluding the discriminant
        authority: Authority for kinds with an authority slot
        multi_signers: Multisig members signing for ``authority``
        members: Multisig member keys, for the InitializeMultisig kinds only
        program_id: Token program to target

    Raises:
        InvalidInstructionKeysError: If a slot is missing or unknown, or
            members are given to a kind that takes none
        AuthorizationShapeError: If the authority does not fit the kind
        LayoutError: If the data does not fit the kind's layout
    """
    template = get_account_template(kind)
    kind = TokenInstruction(kind)

    unknown = set(accounts) - set(template.names)
    if unknown:
        raise InvalidInstructionKeysError(
            f"unexpected accounts for {kind.name}: {sorted(unknown)}"
        )

    keys: List[AccountMeta] = []
    for slot in template.slots:
        pubkey = accounts.get(slot.name)
        if pubkey is None:
            raise InvalidInstructionKeysError(
                f"missing {slot.name} account for {kind.name}"
            )
        keys.append(
            AccountMeta(pubkey=pubkey, is_signer=False, is_writable=slot.is_writable)
        )

    if template.authority is not None:
        if authority is None:
            raise AuthorizationShapeError(f"{kind.name} requires an authority")
        keys = resolve_authority(keys, authority, multi_signers).accounts
    elif authority is not None or multi_signers:
        raise AuthorizationShapeError(f"{kind.name} takes no authority")

    if members and not template.members:
        raise InvalidInstructionKeysError(f"{kind.name} takes no member accounts")
    for member in members:
        keys.append(AccountMeta(pubkey=member, is_signer=False, is_writable=False))

    return Instruction(
        program_id=program_id,
        accounts=keys,
        data=encode_instruction_data(kind, data),
    )


# =============================================================================
# Initialization
# =============================================================================


def build_initialize_mint_instruction(
    mint: Pubkey,
    decimals: int,
    mint_authority: Pubkey,
    freeze_authority: Optional[Pubkey] = None,
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the initialize_mint instruction.

    Accounts:
    0. mint (writable)
    1. rent sysvar

    Data: [0, decimals (u8), mint_authority (32), freeze_authority option (33)]
    """
    return build_token_instruction(
        TokenInstruction.INITIALIZE_MINT,
        {"mint": mint, "rent": SYSVAR_RENT_PUBKEY},
        {
            "decimals": decimals,
            "mint_authority": mint_authority,
            "freeze_authority": freeze_authority,
        },
        program_id=program_id,
    )


def build_initialize_mint2_instruction(
    mint: Pubkey,
    decimals: int,
    mint_authority: Pubkey,
    freeze_authority: Optional[Pubkey] = None,
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the initialize_mint2 instruction (no rent sysvar account)."""
    return build_token_instruction(
        TokenInstruction.INITIALIZE_MINT2,
        {"mint": mint},
        {
            "decimals": decimals,
            "mint_authority": mint_authority,
            "freeze_authority": freeze_authority,
        },
        program_id=program_id,
    )


def build_initialize_account_instruction(
    account: Pubkey,
    mint: Pubkey,
    owner: Pubkey,
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the initialize_account instruction.

    Accounts:
    0. account (writable)
    1. mint
    2. owner
    3. rent sysvar
    """
    return build_token_instruction(
        TokenInstruction.INITIALIZE_ACCOUNT,
        {"account": account, "mint": mint, "owner": owner, "rent": SYSVAR_RENT_PUBKEY},
        program_id=program_id,
    )


def build_initialize_account2_instruction(
    account: Pubkey,
    mint: Pubkey,
    owner: Pubkey,
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the initialize_account2 instruction (owner passed in data)."""
    return build_token_instruction(
        TokenInstruction.INITIALIZE_ACCOUNT2,
        {"account": account, "mint": mint, "rent": SYSVAR_RENT_PUBKEY},
        {"owner": owner},
        program_id=program_id,
    )


def build_initialize_account3_instruction(
    account: Pubkey,
    mint: Pubkey,
    owner: Pubkey,
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the initialize_account3 instruction (no rent sysvar account)."""
    return build_token_instruction(
        TokenInstruction.INITIALIZE_ACCOUNT3,
        {"account": account, "mint": mint},
        {"owner": owner},
        program_id=program_id,
    )


def _check_multisig_members(members: Sequence[Pubkey], m: int) -> None:
    if not 1 <= len(members) <= MAX_SIGNERS:
        raise InvalidInstructionKeysError(
            f"multisig needs 1-{MAX_SIGNERS} members, got {len(members)}"
        )
    if not 1 <= m <= len(members):
        raise AuthorizationShapeError(
            f"threshold {m} must be between 1 and {len(members)}"
        )


def build_initialize_multisig_instruction(
    account: Pubkey,
    members: Sequence[Pubkey],
    m: int,
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the initialize_multisig instruction.

    Accounts:
    0. multisig account (writable)
    1. rent sysvar
    2+. member keys

    Data: [2, m (u8)]
    """
    _check_multisig_members(members, m)
    return build_token_instruction(
        TokenInstruction.INITIALIZE_MULTISIG,
        {"account": account, "rent": SYSVAR_RENT_PUBKEY},
        {"m": m},
        members=members,
        program_id=program_id,
    )


def build_initialize_multisig2_instruction(
    account: Pubkey,
    members: Sequence[Pubkey],
    m: int,
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the initialize_multisig2 instruction (no rent sysvar account)."""
    _check_multisig_members(members, m)
    return build_token_instruction(
        TokenInstruction.INITIALIZE_MULTISIG2,
        {"account": account},
        {"m": m},
        members=members,
        program_id=program_id,
    )


def build_initialize_immutable_owner_instruction(
    account: Pubkey,
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the initialize_immutable_owner instruction."""
    return build_token_instruction(
        TokenInstruction.INITIALIZE_IMMUTABLE_OWNER,
        {"account": account},
        program_id=program_id,
    )


# =============================================================================
# Transfers and delegation
# =============================================================================


def build_transfer_instruction(
    source: Pubkey,
    destination: Pubkey,
    owner: Authority,
    amount: int,
    multi_signers: Sequence[Signer] = (),
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the transfer instruction.

    Accounts:
    0. source (writable)
    1. destination (writable)
    2. owner (signer, or multisig followed by its signers)

    Data: [3, amount (u64)]
    """
    return build_token_instruction(
        TokenInstruction.TRANSFER,
        {"source": source, "destination": destination},
        {"amount": amount},
        authority=owner,
        multi_signers=multi_signers,
        program_id=program_id,
    )


def build_transfer_checked_instruction(
    source: Pubkey,
    mint: Pubkey,
    destination: Pubkey,
    owner: Authority,
    amount: int,
    decimals: int,
    multi_signers: Sequence[Signer] = (),
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the transfer_checked instruction.

    Accounts:
    0. source (writable)
    1. mint
    2. destination (writable)
    3. owner (signer, or multisig followed by its signers)

    Data: [12, amount (u64), decimals (u8)]
    """
    return build_token_instruction(
        TokenInstruction.TRANSFER_CHECKED,
        {"source": source, "mint": mint, "destination": destination},
        {"amount": amount, "decimals": decimals},
        authority=owner,
        multi_signers=multi_signers,
        program_id=program_id,
    )


def build_approve_instruction(
    account: Pubkey,
    delegate: Pubkey,
    owner: Authority,
    amount: int,
    multi_signers: Sequence[Signer] = (),
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the approve instruction.

    Accounts:
    0. account (writable)
    1. delegate
    2. owner (signer, or multisig followed by its signers)

    Data: [4, amount (u64)]
    """
    return build_token_instruction(
        TokenInstruction.APPROVE,
        {"account": account, "delegate": delegate},
        {"amount": amount},
        authority=owner,
        multi_signers=multi_signers,
        program_id=program_id,
    )


def build_approve_checked_instruction(
    account: Pubkey,
    mint: Pubkey,
    delegate: Pubkey,
    owner: Authority,
    amount: int,
    decimals: int,
    multi_signers: Sequence[Signer] = (),
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the approve_checked instruction.

    Grants ``delegate`` permission to transfer up to ``amount`` tokens from
    ``account``. The program rejects it unless ``decimals`` matches the mint.

    Accounts:
    0. account (writable)
    1. mint
    2. delegate
    3. owner (signer, or multisig followed by its signers)

    Data: [13, amount (u64), decimals (u8)]
    """
    return build_token_instruction(
        TokenInstruction.APPROVE_CHECKED,
        {"account": account, "mint": mint, "delegate": delegate},
        {"amount": amount, "decimals": decimals},
        authority=owner,
        multi_signers=multi_signers,
        program_id=program_id,
    )


def build_revoke_instruction(
    account: Pubkey,
    owner: Authority,
    multi_signers: Sequence[Signer] = (),
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the revoke instruction.

    Accounts:
    0. account (writable)
    1. owner (signer, or multisig followed by its signers)
    """
    return build_token_instruction(
        TokenInstruction.REVOKE,
        {"account": account},
        authority=owner,
        multi_signers=multi_signers,
        program_id=program_id,
    )


def build_set_authority_instruction(
    account: Pubkey,
    current_authority: Authority,
    authority_type: AuthorityType,
    new_authority: Optional[Pubkey],
    multi_signers: Sequence[Signer] = (),
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the set_authority instruction.

    Passing ``new_authority=None`` removes the authority for good.

    Accounts:
    0. mint or token account (writable)
    1. current authority (signer, or multisig followed by its signers)

    Data: [6, authority_type (u8), new_authority option (33)]
    """
    return build_token_instruction(
        TokenInstruction.SET_AUTHORITY,
        {"account": account},
        {"authority_type": authority_type, "new_authority": new_authority},
        authority=current_authority,
        multi_signers=multi_signers,
        program_id=program_id,
    )


# =============================================================================
# Supply
# =============================================================================


def build_mint_to_instruction(
    mint: Pubkey,
    destination: Pubkey,
    authority: Authority,
    amount: int,
    multi_signers: Sequence[Signer] = (),
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the mint_to instruction.

    Accounts:
    0. mint (writable)
    1. destination (writable)
    2. mint authority (signer, or multisig followed by its signers)

    Data: [7, amount (u64)]
    """
    return build_token_instruction(
        TokenInstruction.MINT_TO,
        {"mint": mint, "destination": destination},
        {"amount": amount},
        authority=authority,
        multi_signers=multi_signers,
        program_id=program_id,
    )


def build_mint_to_checked_instruction(
    mint: Pubkey,
    destination: Pubkey,
    authority: Authority,
    amount: int,
    decimals: int,
    multi_signers: Sequence[Signer] = (),
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the mint_to_checked instruction."""
    return build_token_instruction(
        TokenInstruction.MINT_TO_CHECKED,
        {"mint": mint, "destination": destination},
        {"amount": amount, "decimals": decimals},
        authority=authority,
        multi_signers=multi_signers,
        program_id=program_id,
    )


def build_burn_instruction(
    account: Pubkey,
    mint: Pubkey,
    owner: Authority,
    amount: int,
    multi_signers: Sequence[Signer] = (),
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the burn instruction.

    Accounts:
    0. account (writable)
    1. mint (writable)
    2. owner (signer, or multisig followed by its signers)

    Data: [8, amount (u64)]
    """
    return build_token_instruction(
        TokenInstruction.BURN,
        {"account": account, "mint": mint},
        {"amount": amount},
        authority=owner,
        multi_signers=multi_signers,
        program_id=program_id,
    )


def build_burn_checked_instruction(
    account: Pubkey,
    mint: Pubkey,
    owner: Authority,
    amount: int,
    decimals: int,
    multi_signers: Sequence[Signer] = (),
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the burn_checked instruction."""
    return build_token_instruction(
        TokenInstruction.BURN_CHECKED,
        {"account": account, "mint": mint},
        {"amount": amount, "decimals": decimals},
        authority=owner,
        multi_signers=multi_signers,
        program_id=program_id,
    )


def build_amount_to_ui_amount_instruction(
    mint: Pubkey,
    amount: int,
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the amount_to_ui_amount instruction (result via return data)."""
    return build_token_instruction(
        TokenInstruction.AMOUNT_TO_UI_AMOUNT,
        {"mint": mint},
        {"amount": amount},
        program_id=program_id,
    )


# =============================================================================
# Account state
# =============================================================================


def build_close_account_instruction(
    account: Pubkey,
    destination: Pubkey,
    authority: Authority,
    multi_signers: Sequence[Signer] = (),
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the close_account instruction.

    Accounts:
    0. account (writable)
    1. destination for the reclaimed lamports (writable)
    2. close authority (signer, or multisig followed by its signers)
    """
    return build_token_instruction(
        TokenInstruction.CLOSE_ACCOUNT,
        {"account": account, "destination": destination},
        authority=authority,
        multi_signers=multi_signers,
        program_id=program_id,
    )


def build_freeze_account_instruction(
    account: Pubkey,
    mint: Pubkey,
    authority: Authority,
    multi_signers: Sequence[Signer] = (),
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the freeze_account instruction.

    Accounts:
    0. account (writable)
    1. mint
    2. freeze authority (signer, or multisig followed by its signers)
    """
    return build_token_instruction(
        TokenInstruction.FREEZE_ACCOUNT,
        {"account": account, "mint": mint},
        authority=authority,
        multi_signers=multi_signers,
        program_id=program_id,
    )


def build_thaw_account_instruction(
    account: Pubkey,
    mint: Pubkey,
    authority: Authority,
    multi_signers: Sequence[Signer] = (),
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the thaw_account instruction."""
    return build_token_instruction(
        TokenInstruction.THAW_ACCOUNT,
        {"account": account, "mint": mint},
        authority=authority,
        multi_signers=multi_signers,
        program_id=program_id,
    )


def build_sync_native_instruction(
    account: Pubkey,
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the sync_native instruction for a wrapped SOL account."""
    return build_token_instruction(
        TokenInstruction.SYNC_NATIVE,
        {"account": account},
        program_id=program_id,
    )


# =============================================================================
# Associated token accounts
# =============================================================================


def build_create_associated_token_account_instruction(
    payer: Pubkey,
    owner: Pubkey,
    mint: Pubkey,
    idempotent: bool = False,
    program_id: Pubkey = TOKEN_PROGRAM_ID,
    associated_token_program_id: Pubkey = ASSOCIATED_TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build an instruction creating the associated token account of owner/mint.

    With ``idempotent=True`` the instruction succeeds if the account already
    exists.

    Accounts:
    0. payer (signer, writable)
    1. associated token account (writable)
    2. owner
    3. mint
    4. system_program
    5. token_program
    """
    associated_account = get_associated_token_address(owner, mint, program_id)

    accounts = [
        AccountMeta(pubkey=payer, is_signer=True, is_writable=True),
        AccountMeta(pubkey=associated_account, is_signer=False, is_writable=True),
        AccountMeta(pubkey=owner, is_signer=False, is_writable=False),
        AccountMeta(pubkey=mint, is_signer=False, is_writable=False),
        AccountMeta(pubkey=SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(pubkey=program_id, is_signer=False, is_writable=False),
    ]

    data = b"\x01" if idempotent else b""

    return Instruction(
        program_id=associated_token_program_id, accounts=accounts, data=data
    )
