"""Type definitions for the SPL Token SDK."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Union

from solders.instruction import AccountMeta
from solders.keypair import Keypair
from solders.null_signer import NullSigner
from solders.presigner import Presigner
from solders.pubkey import Pubkey

from .errors import AuthorizationShapeError

# Anything solders can sign a transaction with
Signer = Union[Keypair, Presigner, NullSigner]


class TokenInstruction(IntEnum):
    """Instruction discriminants of the SPL Token program."""

    INITIALIZE_MINT = 0
    INITIALIZE_ACCOUNT = 1
    INITIALIZE_MULTISIG = 2
    TRANSFER = 3
    APPROVE = 4
    REVOKE = 5
    SET_AUTHORITY = 6
    MINT_TO = 7
    BURN = 8
    CLOSE_ACCOUNT = 9
    FREEZE_ACCOUNT = 10
    THAW_ACCOUNT = 11
    TRANSFER_CHECKED = 12
    APPROVE_CHECKED = 13
    MINT_TO_CHECKED = 14
    BURN_CHECKED = 15
    INITIALIZE_ACCOUNT2 = 16
    SYNC_NATIVE = 17
    INITIALIZE_ACCOUNT3 = 18
    INITIALIZE_MULTISIG2 = 19
    INITIALIZE_MINT2 = 20
    GET_ACCOUNT_DATA_SIZE = 21  # variable length, not buildable
    INITIALIZE_IMMUTABLE_OWNER = 22
    AMOUNT_TO_UI_AMOUNT = 23
    UI_AMOUNT_TO_AMOUNT = 24  # variable length, not buildable


class AuthorityType(IntEnum):
    """Kinds of authority that SetAuthority can reassign."""

    MINT_TOKENS = 0
    FREEZE_ACCOUNT = 1
    ACCOUNT_OWNER = 2
    CLOSE_ACCOUNT = 3


class AuthorityKind(Enum):
    """Tag of an Authority."""

    SIGNER = "signer"  # the authority signs directly
    MULTISIG = "multisig"  # a multisig account; members co-sign


@dataclass(frozen=True)
class Authority:
    """Party empowered to authorize an operation on an account.

    Either a single signing identity or the bare public key of a multisig
    account whose members sign in its place. Use the ``single`` and
    ``multisig`` constructors rather than building one by hand.

    For offline building where only the owner's address is known, wrap it in a
    ``solders.null_signer.NullSigner``.
    """

    kind: AuthorityKind
    pubkey: Pubkey
    signer: Optional[Signer] = None

    def __post_init__(self):
        if self.kind is AuthorityKind.SIGNER:
            if self.signer is None:
                raise AuthorizationShapeError("single authority requires a signer")
            if self.signer.pubkey() != self.pubkey:
                raise AuthorizationShapeError(
                    f"signer {self.signer.pubkey()} does not match authority {self.pubkey}"
                )
        elif self.kind is AuthorityKind.MULTISIG and self.signer is not None:
            raise AuthorizationShapeError(
                "multisig authority is signed by its members, not a signer"
            )

    @classmethod
    def single(cls, signer: Signer) -> "Authority":
        """Create an authority that signs for itself."""
        return cls(kind=AuthorityKind.SIGNER, pubkey=signer.pubkey(), signer=signer)

    @classmethod
    def multisig(cls, pubkey: Pubkey) -> "Authority":
        """Create an authority backed by a multisig account."""
        return cls(kind=AuthorityKind.MULTISIG, pubkey=pubkey)


@dataclass(frozen=True)
class AuthorizedAccounts:
    """Account list and matching signer set produced by authority resolution."""

    accounts: List[AccountMeta]
    signers: List[Signer]


@dataclass
class DecodedInstruction:
    """A token instruction split back into named accounts and field values."""

    program_id: Pubkey
    kind: TokenInstruction
    accounts: Dict[str, AccountMeta]
    data: Dict[str, Any]
    multi_signers: List[AccountMeta] = field(default_factory=list)
