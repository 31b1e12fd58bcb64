"""Exceptions raised by digicard.

Each error also derives from the builtin exception callers would naturally
catch for that situation, so ``except ValueError`` in a CLI handler still
picks up a validation failure.
"""


class DigicardError(Exception):
    """Base class for all digicard errors."""


class CardValidationError(DigicardError, ValueError):
    """A card field or user input failed validation."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"Invalid {field}: {message}")
        self.field = field


class CardNotFoundError(DigicardError, LookupError):
    """No card matches the given id or slug."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Card not found: {ref}")
        self.ref = ref


class StoreError(DigicardError, ConnectionError):
    """A Store read or write failed."""


class AuthError(DigicardError, ValueError):
    """Login, registration or session handling failed."""


class GeneratorError(DigicardError, ConnectionError):
    """The text generation service failed or returned nothing usable."""
