"""Custom exceptions for the SPL Token program module."""

from typing import Optional


class TokenSdkError(Exception):
    """Base exception for all SPL Token SDK errors."""

    pass


class LayoutError(TokenSdkError):
    """Raised when instruction data does not fit its declared layout."""

    pass


class EncodingRangeError(LayoutError, ValueError):
    """Raised when a value does not fit the width of its field."""

    def __init__(self, field: str, value: object, limit: str):
        self.field = field
        self.value = value
        self.limit = limit
        super().__init__(f"{field} value out of range: {value!r} (must be {limit})")


class LayoutMismatchError(LayoutError, ValueError):
    """Raised when a buffer length does not match the expected span."""

    def __init__(self, expected: int, actual: int, name: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        self.name = name
        prefix = f"{name} data" if name else "Data"
        super().__init__(
            f"{prefix} length mismatch: expected {expected} bytes, got {actual}"
        )


class AuthorizationShapeError(TokenSdkError, ValueError):
    """Raised when an authority and its co-signers do not form a valid shape."""

    def __init__(self, message: str):
        super().__init__(f"Invalid authorization: {message}")


class InvalidInstructionProgramError(TokenSdkError):
    """Raised when an instruction targets a different program."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid instruction program: expected {expected}, got {actual}"
        )


class InvalidInstructionKeysError(TokenSdkError):
    """Raised when an instruction's account list has the wrong shape."""

    def __init__(self, message: str):
        super().__init__(f"Invalid instruction keys: {message}")


class InvalidInstructionDataError(TokenSdkError):
    """Raised when instruction data holds a value the layout cannot represent."""

    def __init__(self, message: str):
        super().__init__(f"Invalid instruction data: {message}")


class InvalidInstructionTypeError(TokenSdkError):
    """Raised when a discriminant has no known or buildable layout."""

    def __init__(self, discriminant: int):
        self.discriminant = discriminant
        super().__init__(f"Invalid instruction type: {discriminant}")
