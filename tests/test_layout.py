"""Tests for instruction data layouts."""

import pytest
from solders.pubkey import Pubkey

from spl_token_sdk import (
    INSTRUCTION_LAYOUTS,
    U64_MAX,
    AuthorityType,
    EncodingRangeError,
    Field,
    FieldType,
    InvalidInstructionDataError,
    InvalidInstructionTypeError,
    Layout,
    LayoutError,
    LayoutMismatchError,
    TokenInstruction,
    declared_span,
    decode_instruction_data,
    encode_instruction_data,
    get_layout,
)

EXPECTED_SPANS = {
    TokenInstruction.INITIALIZE_MINT: 67,
    TokenInstruction.INITIALIZE_ACCOUNT: 1,
    TokenInstruction.INITIALIZE_MULTISIG: 2,
    TokenInstruction.TRANSFER: 9,
    TokenInstruction.APPROVE: 9,
    TokenInstruction.REVOKE: 1,
    TokenInstruction.SET_AUTHORITY: 35,
    TokenInstruction.MINT_TO: 9,
    TokenInstruction.BURN: 9,
    TokenInstruction.CLOSE_ACCOUNT: 1,
    TokenInstruction.FREEZE_ACCOUNT: 1,
    TokenInstruction.THAW_ACCOUNT: 1,
    TokenInstruction.TRANSFER_CHECKED: 10,
    TokenInstruction.APPROVE_CHECKED: 10,
    TokenInstruction.MINT_TO_CHECKED: 10,
    TokenInstruction.BURN_CHECKED: 10,
    TokenInstruction.INITIALIZE_ACCOUNT2: 33,
    TokenInstruction.SYNC_NATIVE: 1,
    TokenInstruction.INITIALIZE_ACCOUNT3: 33,
    TokenInstruction.INITIALIZE_MULTISIG2: 2,
    TokenInstruction.INITIALIZE_MINT2: 67,
    TokenInstruction.INITIALIZE_IMMUTABLE_OWNER: 1,
    TokenInstruction.AMOUNT_TO_UI_AMOUNT: 9,
}


def sample_values(kind):
    """Valid field values for every field of a kind's layout."""
    samples = {
        FieldType.U8: 6,
        FieldType.U64: 1_000_000,
        FieldType.PUBKEY: Pubkey.new_unique(),
        FieldType.OPTION_PUBKEY: Pubkey.new_unique(),
    }
    return {
        f.name: samples[f.type]
        for f in get_layout(kind).fields
        if f.name != "instruction"
    }


class TestDeclaredSpan:
    def test_every_layout_has_expected_span(self):
        assert set(INSTRUCTION_LAYOUTS) == set(EXPECTED_SPANS)
        for kind, span in EXPECTED_SPANS.items():
            assert declared_span(kind) == span

    @pytest.mark.parametrize("kind", sorted(EXPECTED_SPANS))
    def test_encoded_length_equals_span(self, kind):
        data = encode_instruction_data(kind, sample_values(kind))
        assert len(data) == declared_span(kind)

    def test_variable_length_kinds_have_no_layout(self):
        with pytest.raises(InvalidInstructionTypeError):
            declared_span(TokenInstruction.GET_ACCOUNT_DATA_SIZE)
        with pytest.raises(InvalidInstructionTypeError):
            declared_span(TokenInstruction.UI_AMOUNT_TO_AMOUNT)


class TestEncode:
    def test_approve_checked_bytes(self):
        data = encode_instruction_data(
            TokenInstruction.APPROVE_CHECKED, {"amount": 1000, "decimals": 6}
        )

        assert data == bytes([13]) + (1000).to_bytes(8, "little") + bytes([6])

    def test_discriminant_leads(self):
        for kind in EXPECTED_SPANS:
            data = encode_instruction_data(kind, sample_values(kind))
            assert data[0] == int(kind)

    def test_amount_offset(self):
        layout = get_layout(TokenInstruction.TRANSFER_CHECKED)
        assert layout.offset_of("amount") == 1
        assert layout.offset_of("decimals") == 9

    def test_deterministic(self):
        values = {"amount": 123456789, "decimals": 9}

        data1 = encode_instruction_data(TokenInstruction.TRANSFER_CHECKED, values)
        data2 = encode_instruction_data(TokenInstruction.TRANSFER_CHECKED, values)

        assert data1 == data2

    def test_none_option_is_zeroed(self):
        data = encode_instruction_data(
            TokenInstruction.SET_AUTHORITY,
            {"authority_type": AuthorityType.CLOSE_ACCOUNT, "new_authority": None},
        )

        assert data == bytes([6, 3]) + bytes(33)

    def test_some_option_is_tagged(self):
        new_authority = Pubkey.new_unique()
        data = encode_instruction_data(
            TokenInstruction.SET_AUTHORITY,
            {"authority_type": AuthorityType.MINT_TOKENS, "new_authority": new_authority},
        )

        assert data[2] == 1
        assert data[3:] == bytes(new_authority)


class TestRangeRejection:
    def test_negative_amount(self):
        with pytest.raises(EncodingRangeError) as exc_info:
            encode_instruction_data(TokenInstruction.APPROVE, {"amount": -1})
        assert exc_info.value.field == "amount"

    def test_amount_overflow(self):
        with pytest.raises(EncodingRangeError):
            encode_instruction_data(TokenInstruction.APPROVE, {"amount": 2**64})

    def test_range_error_is_value_error(self):
        with pytest.raises(ValueError):
            encode_instruction_data(TokenInstruction.BURN, {"amount": 2**80})

    def test_max_amount_round_trips(self):
        data = encode_instruction_data(TokenInstruction.APPROVE, {"amount": U64_MAX})
        kind, values = decode_instruction_data(data)

        assert kind == TokenInstruction.APPROVE
        assert values == {"amount": 2**64 - 1}

    def test_decimals_overflow(self):
        with pytest.raises(EncodingRangeError):
            encode_instruction_data(
                TokenInstruction.MINT_TO_CHECKED, {"amount": 1, "decimals": 256}
            )

    def test_non_integer_amount(self):
        with pytest.raises(TypeError):
            encode_instruction_data(TokenInstruction.TRANSFER, {"amount": 1.5})


class TestFieldErrors:
    def test_missing_field(self):
        with pytest.raises(LayoutError):
            encode_instruction_data(TokenInstruction.TRANSFER_CHECKED, {"amount": 1})

    def test_unexpected_field(self):
        with pytest.raises(LayoutError):
            encode_instruction_data(
                TokenInstruction.TRANSFER, {"amount": 1, "decimals": 6}
            )

    def test_discriminant_cannot_be_overridden(self):
        with pytest.raises(LayoutError):
            encode_instruction_data(
                TokenInstruction.TRANSFER, {"instruction": 4, "amount": 1}
            )

    def test_duplicate_field_names(self):
        with pytest.raises(LayoutError):
            Layout(Field("amount", FieldType.U64), Field("amount", FieldType.U8))


class TestDecode:
    @pytest.mark.parametrize("kind", sorted(EXPECTED_SPANS))
    def test_round_trip(self, kind):
        values = sample_values(kind)

        decoded_kind, decoded = decode_instruction_data(
            encode_instruction_data(kind, values)
        )

        assert decoded_kind == kind
        assert decoded == values

    def test_none_option_round_trips(self):
        mint_authority = Pubkey.new_unique()
        values = {
            "decimals": 0,
            "mint_authority": mint_authority,
            "freeze_authority": None,
        }

        _, decoded = decode_instruction_data(
            encode_instruction_data(TokenInstruction.INITIALIZE_MINT2, values)
        )

        assert decoded == values

    def test_short_buffer(self):
        data = encode_instruction_data(TokenInstruction.TRANSFER, {"amount": 5})

        with pytest.raises(LayoutMismatchError) as exc_info:
            decode_instruction_data(data[:-1])
        assert exc_info.value.expected == 9
        assert exc_info.value.actual == 8

    def test_long_buffer(self):
        data = encode_instruction_data(TokenInstruction.TRANSFER, {"amount": 5})

        with pytest.raises(LayoutMismatchError):
            decode_instruction_data(data + b"\x00")

    def test_empty_buffer(self):
        with pytest.raises(LayoutMismatchError):
            decode_instruction_data(b"")

    def test_unknown_discriminant(self):
        with pytest.raises(InvalidInstructionTypeError) as exc_info:
            decode_instruction_data(bytes([99]))
        assert exc_info.value.discriminant == 99

    def test_invalid_option_tag(self):
        data = bytes([6, 0, 2]) + bytes(32)

        with pytest.raises(InvalidInstructionDataError):
            decode_instruction_data(data)

    def test_none_option_with_key_bytes(self):
        data = bytes([6, 0, 0]) + bytes(Pubkey.new_unique())

        with pytest.raises(InvalidInstructionDataError):
            decode_instruction_data(data)

    def test_layout_decode_requires_exact_span(self):
        layout = Layout(Field("a", FieldType.U8), Field("b", FieldType.U64))

        assert layout.span == 9
        with pytest.raises(LayoutMismatchError):
            layout.decode(bytes(10))
