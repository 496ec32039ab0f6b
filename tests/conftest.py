"""
Shared fixtures: an in-memory JSON-RPC node served through
httpx.MockTransport, so no test touches the network.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx
import pytest
from eth_account import Account

from delegate7702.pneuma.rpc import RpcClient


# Well-known throwaway test key, never funded on any real network.
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"

TX_HASH = "0x" + "ab" * 32


def designator(address: str) -> str:
    """Delegation designator code pointing at ``address``."""
    return "0xef0100" + address.lower().removeprefix("0x")


class FakeNode:
    """
    Just enough of an Ethereum node for a delegation run.

    ``code_after_send`` is merged into the account code table when a raw
    transaction is submitted, standing in for the chain applying the
    authorization.
    """

    def __init__(self) -> None:
        self.codes: dict[str, str] = {}
        self.nonces: dict[str, int] = {}
        self.code_after_send: dict[str, str] = {}
        self.base_fee = 1_000_000_000
        self.priority_fee = 1_500_000_000
        self.receipt_status = "0x1"
        self.receipt_delay = 0
        self.send_error: Optional[dict[str, Any]] = None
        self.sent: list[str] = []
        self.calls: list[str] = []

    # ---- wiring ----

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def client(self, rpc_url: str = "http://fake-node", **kwargs: Any) -> RpcClient:
        return RpcClient(rpc_url, transport=self.transport, **kwargs)

    def set_code(self, address: str, code: str) -> None:
        self.codes[address.lower()] = code

    def delegate_on_send(self, address: str, target: str) -> None:
        self.code_after_send[address.lower()] = designator(target)

    def handle(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        method = payload["method"]
        self.calls.append(method)

        handler = getattr(self, "_" + method, None)
        if handler is None:
            body = {"code": -32601, "message": f"method {method} not found"}
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "error": body})

        try:
            result = handler(*payload["params"])
        except RuntimeError as exc:
            body = {"code": -32000, "message": str(exc)}
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "error": body})
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": result})

    # ---- RPC methods ----

    def _eth_getCode(self, address: str, block: str) -> str:
        return self.codes.get(address.lower(), "0x")

    def _eth_getTransactionCount(self, address: str, block: str) -> str:
        return hex(self.nonces.get(address.lower(), 0))

    def _eth_getBlockByNumber(self, tag: str, full: bool) -> dict:
        return {"number": "0x10", "baseFeePerGas": hex(self.base_fee)}

    def _eth_maxPriorityFeePerGas(self) -> str:
        return hex(self.priority_fee)

    def _eth_sendRawTransaction(self, raw_tx: str) -> str:
        if self.send_error is not None:
            raise RuntimeError(self.send_error["message"])
        self.sent.append(raw_tx)
        self.codes.update(self.code_after_send)
        return TX_HASH

    def _eth_getTransactionReceipt(self, tx_hash: str) -> Optional[dict]:
        if tx_hash != TX_HASH or not self.sent:
            return None
        if self.receipt_delay > 0:
            self.receipt_delay -= 1
            return None
        return {
            "transactionHash": tx_hash,
            "status": self.receipt_status,
            "blockNumber": "0x11",
        }


@pytest.fixture()
def node() -> FakeNode:
    return FakeNode()


@pytest.fixture()
def private_key() -> str:
    return TEST_PRIVATE_KEY


@pytest.fixture()
def account_address(private_key: str) -> str:
    return Account.from_key(private_key).address


@pytest.fixture()
def target() -> str:
    return "0x1111111111111111111111111111111111111111"


@pytest.fixture()
def other_target() -> str:
    return "0x2222222222222222222222222222222222222222"
