"""HTTP API for the Stellar auth service."""
