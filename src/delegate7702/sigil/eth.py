"""
ECDSA / secp256k1 account handling for delegate7702.

This module derives the signing account from the private key given on the
command line and produces EIP-7702 authorizations with it.  The key is
never written anywhere.

Dependencies: eth-account (lightweight, no full web3.py needed)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Authorization:
    """
    A signed EIP-7702 authorization tuple.

    Attributes:
        contract_address: Checksummed address the account delegates to
        chain_id: Chain the authorization is valid on
        nonce: Account nonce the authorization is bound to
        y_parity: Signature recovery bit
        r: Signature r value
        s: Signature s value
    """
    contract_address: str
    chain_id: int
    nonce: int
    y_parity: int
    r: int
    s: int

    def to_tx_entry(self) -> dict[str, Any]:
        """Render as an ``authorizationList`` entry for eth-account."""
        return {
            "chainId": self.chain_id,
            "address": self.contract_address,
            "nonce": self.nonce,
            "yParity": self.y_parity,
            "r": self.r,
            "s": self.s,
        }


def get_account(private_key: str) -> LocalAccount:
    """
    Get an eth-account LocalAccount from a private key.

    Args:
        private_key: 0x-prefixed hex private key

    Returns:
        LocalAccount instance for signing
    """
    return Account.from_key(private_key)


def sign_authorization(
    account: LocalAccount,
    contract_address: str,
    chain_id: int,
    nonce: int,
) -> Authorization:
    """
    Sign an EIP-7702 authorization delegating ``account`` to a contract.

    Args:
        account: Signing account
        contract_address: Address whose code the account will execute
        chain_id: Chain the authorization is bound to
        nonce: Nonce the account will have when the authorization is
               applied.  When the same account also sends the carrying
               transaction this is the transaction nonce + 1.

    Returns:
        Signed Authorization
    """
    contract_address = to_checksum_address(contract_address)
    signed = account.sign_authorization(
        {
            "chainId": chain_id,
            "address": contract_address,
            "nonce": nonce,
        }
    )
    logger.debug(
        "Signed authorization for %s -> %s (chain %d, nonce %d)",
        account.address,
        contract_address,
        chain_id,
        nonce,
    )
    return Authorization(
        contract_address=contract_address,
        chain_id=signed.chain_id,
        nonce=signed.nonce,
        y_parity=signed.y_parity,
        r=signed.r,
        s=signed.s,
    )
