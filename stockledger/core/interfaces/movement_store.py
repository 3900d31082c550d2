"""Abstract interface for the movement ledger."""

from abc import ABC, abstractmethod

from stockledger.core.entities.movement import Movement, UnreconciledMovement


class IMovementStore(ABC):
    """
    Append-only log of stock movements keyed by opaque id.

    Implementations never validate content on append; that is the
    recorder's job. Medium failures surface as ``StorageFailureError``.
    """

    @abstractmethod
    async def append(self, movement: Movement) -> Movement:
        """Add one movement to the end of the log."""
        pass

    @abstractmethod
    async def all(self) -> list[Movement]:
        """Return every stored movement in insertion order."""
        pass

    @abstractmethod
    async def delete_by_id(self, movement_id: str) -> bool:
        """Remove a movement if present. Returns False when it was absent."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Empty the log entirely."""
        pass

    @abstractmethod
    async def mark_unreconciled(self, movement_id: str, reason: str) -> None:
        """Flag a movement whose catalog update did not go through."""
        pass

    @abstractmethod
    async def list_unreconciled(self) -> list[UnreconciledMovement]:
        """List flagged movements, oldest flag first."""
        pass

    @abstractmethod
    async def resolve_unreconciled(self, movement_id: str) -> bool:
        """Drop a flag after manual review. Returns False when none existed."""
        pass
