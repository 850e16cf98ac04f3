"""Wallet login for Stellar accounts via signed one-time challenges."""

__version__ = "0.1.0"
