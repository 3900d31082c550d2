"""Versioned SQL migrations for the ledger database."""
