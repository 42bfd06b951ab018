"""Instruction decoding for the SPL Token program.

The inverse of ``build_token_instruction``: splits an instruction back into
named accounts and field values using the same templates and layouts.
"""

from typing import Dict, List

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from .constants import MAX_SIGNERS, TOKEN_PROGRAM_ID
from .errors import InvalidInstructionKeysError, InvalidInstructionProgramError
from .instructions import get_account_template
from .layout import decode_instruction_data
from .types import DecodedInstruction, TokenInstruction


def decode_instruction(
    instruction: Instruction,
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> DecodedInstruction:
    """Decode a token instruction.

    Accounts past the template's slots are returned in ``multi_signers``:
    the co-signers of a multisig authority, or the member keys of an
    InitializeMultisig instruction.

    Raises:
        InvalidInstructionProgramError: If the instruction targets another program
        InvalidInstructionTypeError: If the discriminant is unknown
        LayoutMismatchError: If the data length does not match the layout
        InvalidInstructionKeysError: If the account list has the wrong shape
    """
    if instruction.program_id != program_id:
        raise InvalidInstructionProgramError(
            str(program_id), str(instruction.program_id)
        )

    kind, data = decode_instruction_data(bytes(instruction.data))
    template = get_account_template(kind)
    keys = list(instruction.accounts)

    expected = len(template.slots) + (1 if template.authority else 0)
    if len(keys) < expected:
        raise InvalidInstructionKeysError(
            f"{kind.name} needs at least {expected} accounts, got {len(keys)}"
        )
    if len(keys) > expected and not (template.authority or template.members):
        raise InvalidInstructionKeysError(
            f"{kind.name} takes exactly {expected} accounts, got {len(keys)}"
        )

    accounts: Dict[str, AccountMeta] = dict(zip(template.names, keys))
    extras = keys[expected:]
    if template.authority:
        authority = keys[len(template.slots)]
        accounts[template.authority] = authority
        _check_authority_signers(kind, authority, extras)

    return DecodedInstruction(
        program_id=instruction.program_id,
        kind=kind,
        accounts=accounts,
        data=data,
        multi_signers=extras,
    )


def _check_authority_signers(
    kind: TokenInstruction, authority: AccountMeta, extras: List[AccountMeta]
) -> None:
    # A signing authority stands alone; a multisig key is followed by its signers
    if authority.is_signer:
        if extras:
            raise InvalidInstructionKeysError(
                f"{kind.name} has {len(extras)} account(s) after a signing authority"
            )
        return
    if not extras or len(extras) > MAX_SIGNERS:
        raise InvalidInstructionKeysError(
            f"{kind.name} multisig authority needs 1 to {MAX_SIGNERS} signers, "
            f"got {len(extras)}"
        )
    unsigned = [str(meta.pubkey) for meta in extras if not meta.is_signer]
    if unsigned:
        raise InvalidInstructionKeysError(
            f"{kind.name} multisig signers not flagged as signers: {unsigned}"
        )
