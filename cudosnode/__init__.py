"""Decimals, addresses, coins, and in-memory bank, admin and minting modules for a proof-of-stake ledger."""

__version__ = "0.1.0"
__all__ = ["address", "admin", "bank", "coins", "dec", "errors", "legacy_params", "mint"]