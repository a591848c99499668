"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~natayark.exceptions.NatayarkError` subclass.
Shell wrappers can inspect the exit code to tell a rejected password from
a network outage without parsing stderr.

Example::

    $ natayark login --user alice --password-source env:NATAYARK_PASSWORD
    $ echo $?
    3   # EXIT_PROVIDER_REJECTED -- Natayark ID answered flag=false
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_PROVIDER_REJECTED = 3
"""The identity provider rejected the request (``flag`` was false)."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_DECODE_ERROR = 7
"""A response or header did not have the expected shape."""
