"""Infrastructure layer implementations."""

from stockledger.infrastructure import catalog, pdf, storage

__all__ = ["catalog", "pdf", "storage"]
