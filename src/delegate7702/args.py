"""
Command-line argument parsing.

Turns the three positional arguments into an immutable InvocationRequest.
Checks run in a fixed order: argument count, private key, delegate
address, chain id.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Sequence

from eth_utils import is_address, to_checksum_address

from .chains import Chain, SUPPORTED_CHAINS, describe_supported_chains, get_chain
from .errors import FormatError, UnsupportedChainError, UsageError


USAGE = "Usage: delegate7702 <privateKey> <delegateAddress> <chainId>"

# Order of the secp256k1 group; a private key must lie in [1, n - 1].
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

_PRIVATE_KEY_RE = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")
_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_CHAIN_ID_RE = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class InvocationRequest:
    """
    Validated inputs for one run.

    Attributes:
        private_key: 0x-prefixed hex private key
        delegate_address: Checksummed address to delegate execution to
        chain: Target network
    """
    private_key: str = field(repr=False)
    delegate_address: str
    chain: Chain


def parse_private_key(value: str) -> str:
    """Validate a hex private key and return it 0x-prefixed."""
    if not _PRIVATE_KEY_RE.fullmatch(value):
        raise FormatError(
            "Invalid private key format. Must be 64 hex characters, "
            "optionally 0x-prefixed."
        )
    if not value.startswith("0x"):
        value = "0x" + value
    if not 0 < int(value, 16) < SECP256K1_N:
        raise FormatError("Invalid private key. Value is outside the secp256k1 range.")
    return value


def parse_address(value: str) -> str:
    """Validate a 0x-prefixed address and return its checksummed form."""
    # Lowercase, or an exact EIP-55 checksum; all-uppercase is not accepted
    if (
        not _ADDRESS_RE.fullmatch(value)
        or not is_address(value)
        or (value != value.lower() and to_checksum_address(value) != value)
    ):
        raise FormatError(
            "Invalid delegate address format. Must be a valid Ethereum "
            "address with 0x prefix."
        )
    return to_checksum_address(value)


def parse_chain(value: str) -> Chain:
    chain_id = int(value) if _CHAIN_ID_RE.fullmatch(value) else None
    if chain_id not in SUPPORTED_CHAINS:
        raise UnsupportedChainError(
            f"Invalid chain ID. Must be one of: {describe_supported_chains()}"
        )
    return get_chain(chain_id)


def parse_args(args: Sequence[str]) -> InvocationRequest:
    """
    Parse ``<privateKey> <delegateAddress> <chainId>``.

    Raises:
        UsageError: If there are not exactly three arguments
        FormatError: If the key or address is malformed
        UnsupportedChainError: If the chain id is not supported
    """
    if len(args) != 3:
        raise UsageError(USAGE)

    private_key, delegate_address, chain_id = args

    return InvocationRequest(
        private_key=parse_private_key(private_key),
        delegate_address=parse_address(delegate_address),
        chain=parse_chain(chain_id),
    )
