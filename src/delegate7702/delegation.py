"""
Delegation Inspector - Classify an account's on-chain code.

An EIP-7702 delegated account carries a 23-byte delegation designator as
its code: the marker ``0xef0100`` followed by the 20-byte address of the
contract it delegates to.  Anything else that is non-empty is ordinary
contract code and cannot be delegated by this tool.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from eth_utils import to_checksum_address

from .errors import NotDelegatableError, RpcError
from .pneuma.rpc import RpcClient


DELEGATION_DESIGNATOR = bytes.fromhex("ef0100")
ADDRESS_LENGTH = 20


@dataclass(frozen=True)
class NotDelegated:
    is_delegated = False


@dataclass(frozen=True)
class DelegatedTo:
    address: str
    is_delegated = True

    def points_to(self, address: str) -> bool:
        """Case-insensitive address comparison."""
        return self.address.lower() == address.lower()


DelegationInformation = Union[NotDelegated, DelegatedTo]


def _code_bytes(code: str) -> bytes:
    hexed = code[2:] if code.startswith(("0x", "0X")) else code
    try:
        return bytes.fromhex(hexed)
    except ValueError as exc:
        raise RpcError(f"Malformed code returned by node: {code[:20]}...") from exc


def decode_delegation_code(code: Optional[str]) -> DelegationInformation:
    """
    Decode account code into delegation information.

    Args:
        code: 0x-prefixed hex code as returned by ``eth_getCode``

    Returns:
        NotDelegated for empty code, DelegatedTo for a delegation designator

    Raises:
        NotDelegatableError: If the code is ordinary contract bytecode
    """
    if not code or code in ("0x", "0X"):
        return NotDelegated()

    raw = _code_bytes(code)
    if not raw:
        return NotDelegated()

    if not raw.startswith(DELEGATION_DESIGNATOR):
        raise NotDelegatableError("Account is a contract and cannot be delegated to")

    pointer = raw[len(DELEGATION_DESIGNATOR):]
    if len(pointer) != ADDRESS_LENGTH:
        raise NotDelegatableError(
            f"Malformed delegation designator: expected {ADDRESS_LENGTH} address "
            f"bytes after 0xef0100, got {len(pointer)}"
        )

    return DelegatedTo(address=to_checksum_address("0x" + pointer.hex()))


def get_delegation_information(client: RpcClient, address: str) -> DelegationInformation:
    """Fetch the code at ``address`` and classify it."""
    return decode_delegation_code(client.get_code(address))
