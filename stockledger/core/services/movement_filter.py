"""Pure filtering and ordering over a movement collection."""

from collections.abc import Iterable

from stockledger.core.entities.movement import Movement, MovementFilter


def _contains(haystack: str | None, needle: str) -> bool:
    return haystack is not None and needle in haystack.lower()


def matches(movement: Movement, criteria: MovementFilter) -> bool:
    """True when ``movement`` satisfies every field set on ``criteria``."""
    # Date range only applies when both ends are given
    if criteria.start_date is not None and criteria.end_date is not None:
        if not criteria.start_date <= movement.date <= criteria.end_date:
            return False

    if criteria.product_id is not None and movement.product_id != criteria.product_id:
        return False

    if criteria.type is not None and movement.type != criteria.type:
        return False

    if criteria.user:
        user = criteria.user.lower()
        if not (_contains(movement.user, user) or _contains(movement.receiver, user)):
            return False

    if criteria.search_term:
        term = criteria.search_term.lower()
        if not any(
            _contains(field, term)
            for field in (
                movement.product_name,
                movement.reference,
                movement.supplier,
                movement.notes,
            )
        ):
            return False

    return True


def filter_movements(
    movements: Iterable[Movement],
    criteria: MovementFilter | None = None,
) -> list[Movement]:
    """
    Select movements matching ``criteria``, most recent first.

    The result is always sorted by date descending, even with an empty
    filter. Movements sharing a timestamp keep their log order.
    """
    criteria = criteria or MovementFilter()
    selected = [m for m in movements if matches(m, criteria)]
    return sorted(selected, key=lambda m: m.date, reverse=True)


def sum_quantity(movements: Iterable[Movement]) -> int:
    """Total units moved."""
    return sum(m.quantity for m in movements)
