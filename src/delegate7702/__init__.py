"""
delegate7702 - apply and verify an EIP-7702 account delegation.
"""

__version__ = "0.1.0"

__all__ = [
    # Inputs
    "InvocationRequest",
    "parse_args",
    # Chains
    "Chain",
    "SUPPORTED_CHAINS",
    "get_chain",
    # Delegation state
    "DelegatedTo",
    "DelegationInformation",
    "NotDelegated",
    "decode_delegation_code",
    "get_delegation_information",
    # Signing
    "Authorization",
    "get_account",
    "sign_authorization",
    # Chain access
    "RpcClient",
    # Workflow
    "DelegationResult",
    "run_delegation",
    # Errors
    "DelegateError",
    "UsageError",
    "FormatError",
    "UnsupportedChainError",
    "RpcError",
    "NotDelegatableError",
    "SubmissionError",
    "VerificationError",
]

from .args import InvocationRequest, parse_args
from .chains import SUPPORTED_CHAINS, Chain, get_chain
from .delegation import (
    DelegatedTo,
    DelegationInformation,
    NotDelegated,
    decode_delegation_code,
    get_delegation_information,
)
from .errors import (
    DelegateError,
    FormatError,
    NotDelegatableError,
    RpcError,
    SubmissionError,
    UnsupportedChainError,
    UsageError,
    VerificationError,
)
from .pneuma.rpc import RpcClient
from .sigil.eth import Authorization, get_account, sign_authorization
from .workflow import DelegationResult, run_delegation
