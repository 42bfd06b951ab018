"""Authority resolution for SPL Token instructions.

The token program re-derives who signed from transaction metadata, so the
account list of an instruction must flag exactly the parties that sign the
enclosing transaction, in the same order.

Single authority:
    ... base accounts, (authority, signer)

Multisig authority:
    ... base accounts, (multisig, non-signer), (member_1, signer), ...
"""

from typing import List, Sequence

from solders.instruction import AccountMeta

from .constants import MAX_SIGNERS
from .errors import AuthorizationShapeError
from .types import Authority, AuthorityKind, AuthorizedAccounts, Signer


def resolve_authority(
    base_accounts: Sequence[AccountMeta],
    authority: Authority,
    multi_signers: Sequence[Signer] = (),
) -> AuthorizedAccounts:
    """Append the authority (and any multisig co-signers) to an account list.

    Args:
        base_accounts: Accounts intrinsic to the instruction, in program order
        authority: Single signer or multisig account authorizing the operation
        multi_signers: Multisig members signing in place of the authority

    Returns:
        The full account list and the signers the transaction needs

    Raises:
        AuthorizationShapeError: If co-signers are given for a single
            authority, or a multisig authority has none or too many
    """
    accounts: List[AccountMeta] = list(base_accounts)

    if authority.kind is AuthorityKind.SIGNER:
        if multi_signers:
            raise AuthorizationShapeError(
                f"{len(multi_signers)} multisig signer(s) given for single "
                f"authority {authority.pubkey}"
            )
        accounts.append(
            AccountMeta(pubkey=authority.pubkey, is_signer=True, is_writable=False)
        )
        signers = [authority.signer]

    elif authority.kind is AuthorityKind.MULTISIG:
        if not multi_signers:
            raise AuthorizationShapeError(
                f"multisig authority {authority.pubkey} requires at least one signer"
            )
        if len(multi_signers) > MAX_SIGNERS:
            raise AuthorizationShapeError(
                f"{len(multi_signers)} multisig signers exceeds maximum of {MAX_SIGNERS}"
            )
        accounts.append(
            AccountMeta(pubkey=authority.pubkey, is_signer=False, is_writable=False)
        )
        for signer in multi_signers:
            accounts.append(
                AccountMeta(pubkey=signer.pubkey(), is_signer=True, is_writable=False)
            )
        signers = list(multi_signers)

    else:
        raise AuthorizationShapeError(f"unknown authority kind {authority.kind!r}")

    return AuthorizedAccounts(accounts=accounts, signers=signers)


def required_signers(
    authority: Authority, multi_signers: Sequence[Signer] = ()
) -> List[Signer]:
    """Signers a transaction needs to carry for an authority."""
    return resolve_authority([], authority, multi_signers).signers
