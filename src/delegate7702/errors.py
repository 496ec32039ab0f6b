"""
Error taxonomy for delegate7702.

Every failure is fatal to the run.  The CLI reports the message on stderr
and exits with ``exit_code``.
"""

from __future__ import annotations


class DelegateError(RuntimeError):
    exit_code: int = 1


class UsageError(DelegateError):
    """Wrong number of command-line arguments."""


class FormatError(DelegateError):
    """Malformed private key or delegate address."""


class UnsupportedChainError(DelegateError):
    """Chain id is not one of the supported test networks."""


class RpcError(DelegateError):
    """JSON-RPC transport failure or error object in the response."""


class NotDelegatableError(DelegateError):
    """Account holds contract code that is not a delegation designator."""


class SubmissionError(DelegateError):
    """Transaction was rejected, reverted, or never included."""


class VerificationError(DelegateError):
    """Post-transaction delegation state does not match the request."""
