"""
Delegation workflow - inspect, confirm, authorize, submit, verify.

Flow:
1. Read the account's current delegation state
2. Ask the operator to confirm (default: no)
3. Sign an EIP-7702 authorization for the delegate contract
4. Send a transaction carrying only that authorization
5. Wait for inclusion
6. Re-read the delegation state and check it points at the delegate

Each step must finish before the next starts; nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import click

from .args import InvocationRequest
from .delegation import DelegatedTo, DelegationInformation, get_delegation_information
from .errors import VerificationError
from .pneuma.rpc import RpcClient
from .pneuma.tx import build_set_code_tx, sign_and_send, wait_for_inclusion
from .sigil.eth import get_account, sign_authorization

logger = logging.getLogger(__name__)


Confirm = Callable[[str], bool]


@dataclass(frozen=True)
class DelegationResult:
    account_address: str
    delegate_address: str
    tx_hash: str
    before: DelegationInformation
    after: DelegatedTo


def confirmation_message(
    account_address: str,
    delegate_address: str,
    before: DelegationInformation,
) -> str:
    message = f"Are you sure you want to delegate {account_address} to {delegate_address}?"
    if isinstance(before, DelegatedTo):
        message += f"\n\n(Account is already delegated to {before.address})"
    return message


def prompt_confirm(message: str) -> bool:
    """Interactive yes/no prompt.  EOF or Ctrl-C counts as "no"."""
    try:
        return click.confirm(message, default=False)
    except click.Abort:
        return False


def run_delegation(
    request: InvocationRequest,
    client: RpcClient,
    confirm: Confirm = prompt_confirm,
    receipt_timeout: Optional[float] = None,
) -> Optional[DelegationResult]:
    """
    Delegate the request's account to its delegate contract.

    Args:
        request: Parsed command-line inputs
        client: RPC client for the request's chain
        confirm: Called with the summary; must return True to proceed
        receipt_timeout: Seconds to wait for inclusion (default: environment)

    Returns:
        DelegationResult, or None if the operator declined

    Raises:
        NotDelegatableError: If the account already holds contract code
        SubmissionError: If the transaction is rejected or fails
        VerificationError: If the account does not end up delegated
        RpcError: On transport failures
    """
    account = get_account(request.private_key)
    chain = request.chain

    before = get_delegation_information(client, account.address)
    logger.debug("Delegation state before: %s", before)

    if not confirm(confirmation_message(account.address, request.delegate_address, before)):
        return None

    # The sender's nonce is bumped before authorizations are processed, so
    # a self-sponsored authorization must use the following nonce.
    tx_nonce = client.get_nonce(account.address)

    click.echo("\nSigning EIP-7702 authorization...")
    authorization = sign_authorization(
        account,
        request.delegate_address,
        chain_id=chain.chain_id,
        nonce=tx_nonce + 1,
    )

    click.echo("\nSending transaction with authorization...")
    tx = build_set_code_tx(client, chain.chain_id, tx_nonce, [authorization])
    tx_hash = sign_and_send(client, account, tx)
    click.echo(f"  TX: {tx_hash}")
    click.echo(f"  {chain.tx_url(tx_hash)}")

    click.echo("\nWaiting for transaction to be finalized...")
    wait_for_inclusion(client, tx_hash, timeout=receipt_timeout)

    click.echo("\nVerifying delegation...")
    after = get_delegation_information(client, account.address)
    logger.debug("Delegation state after: %s", after)

    if not isinstance(after, DelegatedTo) or not after.points_to(request.delegate_address):
        raise VerificationError(
            "Delegation verification failed. The account was not properly delegated."
        )

    return DelegationResult(
        account_address=account.address,
        delegate_address=request.delegate_address,
        tx_hash=tx_hash,
        before=before,
        after=after,
    )
