"""
Pneuma - On-chain interaction layer for delegate7702.

Provides a JSON-RPC client and the set-code transaction builder used to
carry an EIP-7702 authorization onto the chain.

Uses httpx + eth-account instead of the heavyweight web3.py.
"""
