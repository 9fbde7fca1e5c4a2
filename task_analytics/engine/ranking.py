"""Deterministic ordering and filtering of derived tasks."""

import unicodedata
from typing import Iterable, List, Optional

from ..models.task import DerivedTask, plain_value

ALL = "All"


def title_key(title: str) -> str:
    """Accent- and case-insensitive collation key (``Éclair`` sorts with ``e``)."""
    decomposed = unicodedata.normalize('NFKD', title)
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def sort_key(derived: DerivedTask):
    """Total-order key: ROI desc, priority weight desc, title asc.

    An undefined ROI takes the value -inf, which places it after every
    numeric ROI. Titles compare ignoring accents and case first; the
    case-folded title, the raw title and the task id settle whatever
    remains so equal inputs always land in the same order.
    """
    roi = derived.roi if derived.roi is not None else float('-inf')
    title = str(derived.title)
    return (
        -roi,
        -derived.priority_weight,
        title_key(title),
        title.casefold(),
        title,
        str(derived.task_id),
    )


def sort_tasks(tasks: Iterable[DerivedTask]) -> List[DerivedTask]:
    """Return a new, ranked list; the input is left untouched."""
    return sorted(tasks, key=sort_key)


def _matches(value, wanted: Optional[str]) -> bool:
    if wanted is None or wanted == ALL:
        return True
    return plain_value(value) == plain_value(wanted)


def filter_tasks(
    tasks: Iterable[DerivedTask],
    search: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
) -> List[DerivedTask]:
    """Keep tasks whose title contains ``search`` and whose status and
    priority match. ``None`` or ``"All"`` disables a criterion."""
    needle = search.lower() if search else None
    return [
        task for task in tasks
        if (needle is None or needle in str(task.title).lower())
        and _matches(task.status, status)
        and _matches(task.priority, priority)
    ]
