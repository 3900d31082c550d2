"""Stock movement ledger and inventory analytics service."""

__version__ = "1.0.0"
