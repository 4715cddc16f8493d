"""Errors raised by the credential stores."""


class StoreError(Exception):
    """Base class for credential store failures."""

    code = "store_error"


class StoreUnavailableError(StoreError):
    """The backing store could not be reached, read or written."""

    code = "store_unavailable"

    def __init__(self, store: str, message: str) -> None:
        super().__init__(f"{store}: {message}")
        self.store = store
