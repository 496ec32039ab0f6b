"""
Supported networks.

A static table keyed by chain id.  Adding a network is a matter of adding a
row here.  RPC endpoints can be overridden per chain through the
environment (or a ``.env`` file in the working directory).
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import UnsupportedChainError


@dataclass(frozen=True)
class Chain:
    chain_id: int
    name: str
    default_rpc_url: str
    rpc_env: str
    explorer_url: str

    @property
    def rpc_url(self) -> str:
        """RPC endpoint from the environment, or the public default."""
        return os.environ.get(self.rpc_env, self.default_rpc_url)

    def tx_url(self, tx_hash: str) -> str:
        return f"{self.explorer_url}/tx/{tx_hash}"


SEPOLIA = Chain(
    chain_id=11155111,
    name="Sepolia",
    default_rpc_url="https://ethereum-sepolia-rpc.publicnode.com",
    rpc_env="SEPOLIA_RPC",
    explorer_url="https://sepolia.etherscan.io",
)

LINEA_SEPOLIA = Chain(
    chain_id=59141,
    name="Linea Sepolia",
    default_rpc_url="https://rpc.sepolia.linea.build",
    rpc_env="LINEA_SEPOLIA_RPC",
    explorer_url="https://sepolia.lineascan.build",
)

SUPPORTED_CHAINS: dict[int, Chain] = {
    chain.chain_id: chain for chain in (SEPOLIA, LINEA_SEPOLIA)
}


def get_chain(chain_id: int) -> Chain:
    """
    Look up a supported chain.

    Raises:
        UnsupportedChainError: If the id is not in the table
    """
    chain = SUPPORTED_CHAINS.get(chain_id)
    if chain is None:
        raise UnsupportedChainError(f"Chain with ID {chain_id} not found")
    return chain


def describe_supported_chains() -> str:
    return " or ".join(
        f"{chain.chain_id} ({chain.name})" for chain in SUPPORTED_CHAINS.values()
    )
