"""
Sigil - Key handling and signing for delegate7702.

Wraps eth-account: account derivation from a private key and EIP-7702
authorization signing.
"""
