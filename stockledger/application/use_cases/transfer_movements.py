"""
Ledger import and export in the camelCase ledger layout.

Exported records look like::

    {"id": "...", "productId": 4, "productName": "Cocoa beans",
     "type": "ENTREE", "quantity": 20, "date": "2024-03-04T09:30:00+01:00", ...}

Importing the same list into an empty store reproduces the log in the same
order.
"""

from dataclasses import dataclass
from datetime import tzinfo
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from stockledger.application.dto.responses import ImportResultResponse
from stockledger.config import get_logger
from stockledger.core.entities.movement import Movement
from stockledger.core.exceptions import ValidationError
from stockledger.core.interfaces.movement_store import IMovementStore

logger = get_logger(__name__)


@dataclass
class ImportResult:
    imported: int = 0
    skipped: int = 0


class ExportMovementsUseCase:
    """Dump the whole log, oldest first."""

    def __init__(self, store: IMovementStore):
        self._store = store

    async def execute(self) -> list[dict[str, Any]]:
        movements = await self._store.all()
        logger.info("movements_exported", count=len(movements))
        return [
            m.model_dump(mode="json", by_alias=True, exclude_none=True)
            for m in movements
        ]


class ImportMovementsUseCase:
    """
    Append exported records, skipping ids the store already holds.

    Naive record dates are read in ``tz`` (host-local time when None).
    """

    def __init__(self, store: IMovementStore, tz: tzinfo | None = None):
        self._store = store
        self._tz = tz

    async def execute(self, records: list[dict[str, Any]]) -> ImportResult:
        """
        Validate every record, then append the new ones in order.

        Raises:
            ValidationError: If any record is malformed. Nothing is appended.
        """
        movements = [self._parse(index, record) for index, record in enumerate(records)]

        seen = {m.id for m in await self._store.all()}
        result = ImportResult()
        for movement in movements:
            if movement.id in seen:
                result.skipped += 1
                continue
            await self._store.append(movement)
            seen.add(movement.id)
            result.imported += 1

        logger.info(
            "movements_imported",
            imported=result.imported,
            skipped=result.skipped,
        )
        return result

    def _parse(self, index: int, record: dict[str, Any]) -> Movement:
        try:
            return Movement.model_validate(record, context={"tz": self._tz})
        except PydanticValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            raise ValidationError(
                f"movements[{index}].{location}" if location else f"movements[{index}]",
                first["msg"],
                record.get(location) if location else None,
            ) from e

    @staticmethod
    def to_response(result: ImportResult) -> ImportResultResponse:
        return ImportResultResponse(imported=result.imported, skipped=result.skipped)
