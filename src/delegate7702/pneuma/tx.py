"""
Transaction Builder - Build, sign, and send EIP-7702 set-code transactions.

Uses eth-account for signing and the httpx-based JSON-RPC client for
sending.  The transaction carries nothing but the authorization list: it
goes to the zero address with no data and no value.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional, Sequence

from eth_account.signers.local import LocalAccount

from ..errors import RpcError, SubmissionError
from ..sigil.eth import Authorization
from .rpc import RpcClient

logger = logging.getLogger(__name__)


SET_CODE_TX_TYPE = 4
ZERO_ADDRESS = "0x" + "0" * 40

# Intrinsic gas: base transaction cost plus the per-authorization charge.
# No calldata and no code at the destination, so nothing else is spent.
TX_BASE_COST = 21_000
PER_EMPTY_ACCOUNT_COST = 25_000

DEFAULT_RECEIPT_TIMEOUT = 180.0


def get_receipt_timeout() -> float:
    """Get the receipt wait timeout (seconds) from environment or default."""
    return float(
        os.environ.get("DELEGATE7702_RECEIPT_TIMEOUT", str(DEFAULT_RECEIPT_TIMEOUT))
    )


def set_code_gas_limit(authorization_count: int) -> int:
    return TX_BASE_COST + PER_EMPTY_ACCOUNT_COST * authorization_count


def build_set_code_tx(
    client: RpcClient,
    chain_id: int,
    nonce: int,
    authorizations: Sequence[Authorization],
) -> dict[str, Any]:
    """
    Build an unsigned type-4 transaction carrying ``authorizations``.

    Args:
        client: RPC client used for fee lookup
        chain_id: Chain id for replay protection
        nonce: Sender's transaction nonce
        authorizations: Signed authorizations to apply

    Returns:
        Unsigned transaction dict in eth-account's format
    """
    base_fee = client.get_base_fee()
    priority_fee = client.get_max_priority_fee()

    tx = {
        "type": SET_CODE_TX_TYPE,
        "chainId": chain_id,
        "nonce": nonce,
        "to": ZERO_ADDRESS,
        "data": "0x",
        "value": 0,
        "gas": set_code_gas_limit(len(authorizations)),
        "maxFeePerGas": base_fee * 2 + priority_fee,
        "maxPriorityFeePerGas": priority_fee,
        "accessList": [],
        "authorizationList": [auth.to_tx_entry() for auth in authorizations],
    }
    logger.debug(
        "Built set-code tx: nonce=%d gas=%d maxFeePerGas=%d maxPriorityFeePerGas=%d",
        nonce,
        tx["gas"],
        tx["maxFeePerGas"],
        tx["maxPriorityFeePerGas"],
    )
    return tx


def sign_and_send(client: RpcClient, account: LocalAccount, tx: dict) -> str:
    """
    Sign a transaction and send it.

    Returns:
        Transaction hash

    Raises:
        SubmissionError: If the node rejects the transaction
    """
    signed = account.sign_transaction(tx)
    raw_tx = "0x" + bytes(signed.raw_transaction).hex()

    try:
        tx_hash = client.send_raw_transaction(raw_tx)
    except RpcError as exc:
        raise SubmissionError(f"Transaction rejected: {exc}") from exc

    if not tx_hash:
        raise SubmissionError("Node returned no transaction hash")
    return tx_hash


def wait_for_inclusion(
    client: RpcClient,
    tx_hash: str,
    timeout: Optional[float] = None,
    poll_interval: float = 2.0,
) -> dict:
    """
    Block until the transaction is included and check that it succeeded.

    Returns:
        Transaction receipt dict

    Raises:
        SubmissionError: If the transaction reverted or was not included
                         within ``timeout`` seconds
    """
    timeout = timeout if timeout is not None else get_receipt_timeout()
    try:
        receipt = client.wait_for_receipt(
            tx_hash, timeout=timeout, poll_interval=poll_interval
        )
    except TimeoutError as exc:
        raise SubmissionError(str(exc)) from exc

    status = int(receipt.get("status", "0x0"), 16)
    if status != 1:
        raise SubmissionError(f"Transaction {tx_hash} failed on-chain (status {status})")

    logger.debug("Transaction %s included in block %s", tx_hash, receipt.get("blockNumber"))
    return receipt
