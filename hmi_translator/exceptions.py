"""
Exception types shared by the translator, the CLI and the row driver.
"""


class ConfigurationError(Exception):
    """Raised for problems that must abort a run before any row is processed."""

    pass


class TranslationError(Exception):
    """
    Raised by a translator when a single call fails.

    Attributes:
        kind (str): One of the KIND_* constants.
    """

    KIND_TIMEOUT = "timeout"
    KIND_AUTH = "auth"
    KIND_RATE_LIMIT = "rate_limit"
    KIND_TRANSPORT = "transport"
    KIND_MALFORMED = "malformed"

    def __init__(self, message, kind=KIND_TRANSPORT):
        super().__init__(message)
        self.kind = kind

    @property
    def is_timeout(self):
        return self.kind == self.KIND_TIMEOUT
