"""Exception hierarchy for natayark.

All exceptions inherit from :class:`NatayarkError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`natayark.exit_codes`.
The top-level error handler in :func:`natayark.app.main` catches
``NatayarkError`` and exits with the appropriate code.

Subclass hierarchy::

    NatayarkError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- ProviderError       (exit 3)
    +-- TransportError      (exit 6)
    +-- DecodeError         (exit 7)
    +-- HeaderParseError    (exit 7)
    +-- ConfigError         (exit 1)
"""

from natayark.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_PROVIDER_REJECTED,
)


class NatayarkError(Exception):
    """Base exception for all natayark errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(NatayarkError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class ProviderError(NatayarkError):
    """Raised when Natayark ID answers with ``flag: false``.

    Attributes:
        code: Provider-supplied error code, ``-1`` when the envelope has none.
        msg: Provider-supplied message, verbatim.
    """

    exit_code = EXIT_PROVIDER_REJECTED

    def __init__(self, code: int, msg: str):
        super().__init__(f"[{code}] {msg}")
        self.code = code
        self.msg = msg


class TransportError(NatayarkError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused)."""

    exit_code = EXIT_CONNECTION_ERROR


class DecodeError(NatayarkError):
    """Raised when a response body or header does not have the expected shape."""

    exit_code = EXIT_DECODE_ERROR


class HeaderParseError(NatayarkError):
    """Raised for a malformed ``Set-Cookie`` value or unusable header."""

    exit_code = EXIT_DECODE_ERROR


class ConfigError(NatayarkError):
    """Raised for configuration problems (invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE
