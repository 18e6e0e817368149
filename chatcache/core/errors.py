"""Exceptions raised while materializing entities from gateway payloads."""

from __future__ import annotations


class PayloadError(Exception):
    """Base class for problems with an inbound JSON fragment."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key


class MissingFieldError(PayloadError):
    """A field required to construct an entity is absent or null."""

    def __init__(self, key: str) -> None:
        super().__init__(key, "required field is missing")


class MalformedValueError(PayloadError):
    """A field is present but holds a value of the wrong JSON type."""

    def __init__(self, key: str, value: object) -> None:
        super().__init__(key, f"unexpected value {value!r}")
        self.value = value


class UnknownComponentError(MalformedValueError):
    """A component carries a type or style value that is not modelled."""
