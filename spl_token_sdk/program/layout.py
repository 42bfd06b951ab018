"""Fixed-size instruction data layouts for the SPL Token program.

Every token instruction payload is a flat record: a one-byte discriminant
followed by a fixed sequence of fields. Each layout here mirrors the program's
own definition byte for byte, and the total length (span) is known before
encoding.

Layout of TransferChecked (10 bytes):
- [0]: instruction (u8)
- [1..9]: amount (u64 LE)
- [9]: decimals (u8)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .constants import PUBKEY_LENGTH
from .errors import (
    InvalidInstructionDataError,
    InvalidInstructionTypeError,
    LayoutError,
    LayoutMismatchError,
)
from .types import TokenInstruction
from .utils import (
    decode_pubkey,
    decode_u64,
    decode_u8,
    encode_pubkey,
    encode_u64,
    encode_u8,
)

DISCRIMINANT_FIELD = "instruction"


class FieldType(Enum):
    """Wire type of a layout field, valued by its width in bytes."""

    U8 = ("u8", 1)
    U64 = ("u64", 8)
    PUBKEY = ("pubkey", PUBKEY_LENGTH)
    # u8 presence tag followed by a pubkey, zeroed when absent
    OPTION_PUBKEY = ("option_pubkey", 1 + PUBKEY_LENGTH)

    @property
    def width(self) -> int:
        return self.value[1]


@dataclass(frozen=True)
class Field:
    """A named, fixed-width field."""

    name: str
    type: FieldType

    @property
    def width(self) -> int:
        return self.type.width

    def encode(self, value: Any) -> bytes:
        if self.type is FieldType.U8:
            return encode_u8(value, self.name)
        if self.type is FieldType.U64:
            return encode_u64(value, self.name)
        if self.type is FieldType.PUBKEY:
            return encode_pubkey(value, self.name)
        if self.type is FieldType.OPTION_PUBKEY:
            if value is None:
                return bytes(self.width)
            return b"\x01" + encode_pubkey(value, self.name)
        raise LayoutError(f"Unsupported field type: {self.type}")

    def decode(self, data: bytes, offset: int) -> Any:
        if self.type is FieldType.U8:
            return decode_u8(data, offset)
        if self.type is FieldType.U64:
            return decode_u64(data, offset)
        if self.type is FieldType.PUBKEY:
            return decode_pubkey(data, offset)
        if self.type is FieldType.OPTION_PUBKEY:
            tag = decode_u8(data, offset)
            if tag == 0:
                if any(data[offset + 1 : offset + self.width]):
                    raise InvalidInstructionDataError(
                        f"{self.name} is None but carries non-zero key bytes"
                    )
                return None
            if tag != 1:
                raise InvalidInstructionDataError(
                    f"{self.name} has invalid option tag {tag}"
                )
            return decode_pubkey(data, offset + 1)
        raise LayoutError(f"Unsupported field type: {self.type}")


class Layout:
    """An ordered sequence of fields with a fixed total span."""

    def __init__(self, *fields: Field):
        names = [f.name for f in fields]
        if len(set(names)) != len(names):
            raise LayoutError(f"Duplicate field names in layout: {names}")
        self.fields: Tuple[Field, ...] = fields
        self.span = sum(f.width for f in fields)

    def __repr__(self) -> str:
        inner = ", ".join(f"{f.name}: {f.type.value[0]}" for f in self.fields)
        return f"Layout({inner}; span={self.span})"

    def offset_of(self, name: str) -> int:
        """Byte offset of a field within the layout."""
        offset = 0
        for f in self.fields:
            if f.name == name:
                return offset
            offset += f.width
        raise LayoutError(f"No field named {name!r}")

    def encode(self, values: Mapping[str, Any]) -> bytes:
        """Encode values into exactly ``span`` bytes.

        Raises:
            LayoutError: If a field is missing or an unknown field is given
            EncodingRangeError: If a value does not fit its field
        """
        unknown = set(values) - {f.name for f in self.fields}
        if unknown:
            raise LayoutError(f"Unexpected fields: {sorted(unknown)}")

        data = bytearray()
        for f in self.fields:
            if f.name not in values:
                raise LayoutError(f"Missing value for field {f.name!r}")
            data.extend(f.encode(values[f.name]))

        if len(data) != self.span:
            raise LayoutMismatchError(self.span, len(data))
        return bytes(data)

    def decode(self, data: bytes) -> Dict[str, Any]:
        """Decode exactly ``span`` bytes into a dict of field values.

        Raises:
            LayoutMismatchError: If len(data) != span
        """
        if len(data) != self.span:
            raise LayoutMismatchError(self.span, len(data))

        values: Dict[str, Any] = {}
        offset = 0
        for f in self.fields:
            values[f.name] = f.decode(data, offset)
            offset += f.width
        return values


def _instruction_layout(*fields: Field) -> Layout:
    return Layout(Field(DISCRIMINANT_FIELD, FieldType.U8), *fields)


_EMPTY = _instruction_layout()
_AMOUNT = _instruction_layout(Field("amount", FieldType.U64))
_AMOUNT_CHECKED = _instruction_layout(
    Field("amount", FieldType.U64),
    Field("decimals", FieldType.U8),
)
_INITIALIZE_MINT = _instruction_layout(
    Field("decimals", FieldType.U8),
    Field("mint_authority", FieldType.PUBKEY),
    Field("freeze_authority", FieldType.OPTION_PUBKEY),
)
_INITIALIZE_MULTISIG = _instruction_layout(Field("m", FieldType.U8))
_OWNER = _instruction_layout(Field("owner", FieldType.PUBKEY))
_SET_AUTHORITY = _instruction_layout(
    Field("authority_type", FieldType.U8),
    Field("new_authority", FieldType.OPTION_PUBKEY),
)

# Discriminant -> data layout. GetAccountDataSize and UiAmountToAmount carry
# variable-length payloads and have no entry.
INSTRUCTION_LAYOUTS: Dict[TokenInstruction, Layout] = {
    TokenInstruction.INITIALIZE_MINT: _INITIALIZE_MINT,
    TokenInstruction.INITIALIZE_ACCOUNT: _EMPTY,
    TokenInstruction.INITIALIZE_MULTISIG: _INITIALIZE_MULTISIG,
    TokenInstruction.TRANSFER: _AMOUNT,
    TokenInstruction.APPROVE: _AMOUNT,
    TokenInstruction.REVOKE: _EMPTY,
    TokenInstruction.SET_AUTHORITY: _SET_AUTHORITY,
    TokenInstruction.MINT_TO: _AMOUNT,
    TokenInstruction.BURN: _AMOUNT,
    TokenInstruction.CLOSE_ACCOUNT: _EMPTY,
    TokenInstruction.FREEZE_ACCOUNT: _EMPTY,
    TokenInstruction.THAW_ACCOUNT: _EMPTY,
    TokenInstruction.TRANSFER_CHECKED: _AMOUNT_CHECKED,
    TokenInstruction.APPROVE_CHECKED: _AMOUNT_CHECKED,
    TokenInstruction.MINT_TO_CHECKED: _AMOUNT_CHECKED,
    TokenInstruction.BURN_CHECKED: _AMOUNT_CHECKED,
    TokenInstruction.INITIALIZE_ACCOUNT2: _OWNER,
    TokenInstruction.SYNC_NATIVE: _EMPTY,
    TokenInstruction.INITIALIZE_ACCOUNT3: _OWNER,
    TokenInstruction.INITIALIZE_MULTISIG2: _INITIALIZE_MULTISIG,
    TokenInstruction.INITIALIZE_MINT2: _INITIALIZE_MINT,
    TokenInstruction.INITIALIZE_IMMUTABLE_OWNER: _EMPTY,
    TokenInstruction.AMOUNT_TO_UI_AMOUNT: _AMOUNT,
}


def get_layout(kind: TokenInstruction) -> Layout:
    """Look up the data layout of an instruction kind.

    Raises:
        InvalidInstructionTypeError: If the kind has no fixed layout
    """
    try:
        return INSTRUCTION_LAYOUTS[TokenInstruction(kind)]
    except (KeyError, ValueError):
        raise InvalidInstructionTypeError(int(kind)) from None


def declared_span(kind: TokenInstruction) -> int:
    """Encoded length of an instruction kind's data."""
    return get_layout(kind).span


def encode_instruction_data(
    kind: TokenInstruction, values: Optional[Mapping[str, Any]] = None
) -> bytes:
    """Encode instruction data for a kind, filling in the discriminant.

    ``values`` holds every field except the discriminant.
    """
    layout = get_layout(kind)
    values = dict(values or {})
    if DISCRIMINANT_FIELD in values:
        raise LayoutError(f"{DISCRIMINANT_FIELD!r} is set from the instruction kind")
    values[DISCRIMINANT_FIELD] = int(kind)
    return layout.encode(values)


def decode_instruction_data(data: bytes) -> Tuple[TokenInstruction, Dict[str, Any]]:
    """Decode instruction data into its kind and field values.

    The returned values exclude the discriminant, so
    ``decode_instruction_data(encode_instruction_data(kind, values))`` gives
    back ``(kind, values)``.

    Raises:
        LayoutMismatchError: If data is empty or its length != span
        InvalidInstructionTypeError: If the discriminant is unknown
    """
    if len(data) < 1:
        raise LayoutMismatchError(1, 0)

    layout = get_layout(data[0])
    values = layout.decode(bytes(data))
    kind = TokenInstruction(values.pop(DISCRIMINANT_FIELD))
    return kind, values

