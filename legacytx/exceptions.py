"""Exception hierarchy for legacytx."""

from typing import Any, Optional

__all__ = [
    "LegacyTxError",
    "ValidationError",
    "SerializationError",
    "CryptoError",
    "TransactionError",
]


class LegacyTxError(Exception):
    """Base exception for all legacytx errors."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Optional[Any] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ValidationError(LegacyTxError):
    """Raised when user-supplied data is malformed."""
    pass


class SerializationError(LegacyTxError):
    """Raised when wire bytes cannot be decoded."""
    pass


class CryptoError(LegacyTxError):
    """Raised when a cryptographic operation fails."""
    pass


class TransactionError(LegacyTxError):
    """Raised when a transaction operation cannot be carried out."""
    pass
