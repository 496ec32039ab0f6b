"""
JSON-RPC Client for the supported test networks.

Lightweight alternative to web3.py: uses httpx for HTTP.  Covers exactly
the calls a delegation run needs: code lookup, nonce and fee queries,
raw transaction submission, and receipt polling.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Optional

import httpx

from ..errors import RpcError

logger = logging.getLogger(__name__)


DEFAULT_RPC_TIMEOUT = 30.0


def get_rpc_timeout() -> float:
    """Get the HTTP request timeout (seconds) from environment or default."""
    return float(os.environ.get("DELEGATE7702_RPC_TIMEOUT", str(DEFAULT_RPC_TIMEOUT)))


class RpcClient:
    """
    Minimal JSON-RPC client bound to one endpoint.

    Holds a single httpx.Client for the lifetime of a run; use it as a
    context manager so the connection pool is closed afterwards.

    Args:
        rpc_url: HTTP(S) endpoint
        timeout: Per-request timeout in seconds (default: environment)
        transport: Optional httpx transport (tests pass a MockTransport)
    """

    def __init__(
        self,
        rpc_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.rpc_url = rpc_url
        self._request_id = 0
        self._http = httpx.Client(
            timeout=timeout if timeout is not None else get_rpc_timeout(),
            transport=transport,
        )

    def __enter__(self) -> "RpcClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def call(self, method: str, params: list) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "eth_getCode")
            params: RPC parameters

        Returns:
            Result field from the RPC response

        Raises:
            RpcError: If the request fails or the node returns an error
        """
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": self._request_id,
        }
        logger.debug("rpc -> %s %s", method, params)

        try:
            response = self._http.post(self.rpc_url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise RpcError(f"RPC request {method} failed: {exc}") from exc
        except ValueError as exc:
            raise RpcError(f"RPC response to {method} is not valid JSON") from exc

        if not isinstance(data, dict):
            raise RpcError(f"RPC response to {method} is not a JSON object: {data!r}")

        if "error" in data:
            raise RpcError(f"RPC error: {data['error']}")

        result = data.get("result")
        logger.debug("rpc <- %s %s", method, result)
        return result

    def get_code(self, address: str, block: str = "latest") -> str:
        """
        Get the code stored at an address.

        Returns:
            0x-prefixed hex code ("0x" for accounts without code)
        """
        return self.call("eth_getCode", [address, block]) or "0x"

    def get_nonce(self, address: str, block: str = "pending") -> int:
        """Get the transaction count for an address."""
        result = self.call("eth_getTransactionCount", [address, block])
        return int(result, 16)

    def get_base_fee(self) -> int:
        """Get ``baseFeePerGas`` of the latest block, in wei."""
        block = self.call("eth_getBlockByNumber", ["latest", False])
        if not block or block.get("baseFeePerGas") is None:
            raise RpcError("Latest block has no baseFeePerGas; EIP-1559 not active?")
        return int(block["baseFeePerGas"], 16)

    def get_max_priority_fee(self) -> int:
        """Get the node's suggested priority fee, in wei."""
        result = self.call("eth_maxPriorityFeePerGas", [])
        return int(result, 16)

    def send_raw_transaction(self, raw_tx: str) -> str:
        """
        Send a signed raw transaction.

        Args:
            raw_tx: 0x-prefixed hex encoded signed transaction

        Returns:
            Transaction hash (0x-prefixed hex)
        """
        return self.call("eth_sendRawTransaction", [raw_tx])

    def get_transaction_receipt(self, tx_hash: str) -> Optional[dict]:
        return self.call("eth_getTransactionReceipt", [tx_hash])

    def wait_for_receipt(
        self,
        tx_hash: str,
        timeout: float = 180,
        poll_interval: float = 2.0,
    ) -> dict:
        """
        Wait for a transaction receipt.

        Args:
            tx_hash: Transaction hash
            timeout: Maximum wait time in seconds
            poll_interval: Polling interval in seconds

        Returns:
            Transaction receipt dict

        Raises:
            TimeoutError: If receipt not found within timeout
        """
        start = time.time()
        while True:
            receipt = self.get_transaction_receipt(tx_hash)
            if receipt is not None:
                return receipt
            if time.time() - start >= timeout:
                break
            time.sleep(poll_interval)

        raise TimeoutError(f"Transaction {tx_hash} not confirmed within {timeout}s")
