"""
Clearance Checklist for the Offboarding Engine.

Holds the fixed catalog of department sign-offs an employee must collect
before leaving, and tracks completion and signature state for each item.
"""

import logging
from typing import Dict, List, Tuple

from ..exceptions import ClearanceItemNotFoundError
from ..models import ClearanceItem

logger = logging.getLogger(__name__)

# (id, title, department), in display and print order
DEFAULT_CLEARANCE_CATALOG: Tuple[Tuple[str, str, str], ...] = (
    ("it-equipment", "Return all IT equipment", "Information Technology"),
    ("access-cards", "Hand over access cards and keys", "Security"),
    ("financial-clearance", "Settle all financial dues", "Finance"),
    ("hr-documents", "Sign all HR documents", "Human Resources"),
    ("property", "Return all company property", "Administration"),
)


class ClearanceChecklist:
    """
    Ordered set of clearance items addressed by stable id.

    Items are created once from the catalog and mutated in place; they are
    never added, removed or reordered.
    """

    def __init__(self):
        self._items: Dict[str, ClearanceItem] = {
            item_id: ClearanceItem(id=item_id, title=title, department=department)
            for item_id, title, department in DEFAULT_CLEARANCE_CATALOG
        }
        logger.info(f"Initialized clearance checklist with {len(self._items)} items")

    def __len__(self) -> int:
        return len(self._items)

    def get_item(self, item_id: str) -> ClearanceItem:
        """
        Get a copy of a single clearance item.

        Args:
            item_id: Clearance item id

        Returns:
            Copy of the ClearanceItem

        Raises:
            ClearanceItemNotFoundError: If the id is not in the catalog
        """
        item = self._items.get(item_id)
        if item is None:
            raise ClearanceItemNotFoundError(item_id)
        return item.model_copy()

    def toggle(self, item_id: str, completed: bool) -> bool:
        """
        Mark an item as completed or not completed.

        Returns:
            True if the item was updated, False if the id is unknown
        """
        item = self._items.get(item_id)
        if item is None:
            logger.warning(f"Cannot toggle clearance item: {item_id} not found")
            return False

        item.completed = bool(completed)
        logger.debug(f"Clearance item {item_id} completed={item.completed}")
        return True

    def set_signature(self, item_id: str, value: str) -> bool:
        """
        Record the signature of the responsible department.

        Returns:
            True if the item was updated, False if the id is unknown
        """
        item = self._items.get(item_id)
        if item is None:
            logger.warning(f"Cannot sign clearance item: {item_id} not found")
            return False

        item.signature = "" if value is None else str(value)
        logger.debug(f"Clearance item {item_id} signature updated")
        return True

    def set_comments(self, item_id: str, comments: str) -> bool:
        """Attach free-text comments to an item. Comments never affect completeness."""
        item = self._items.get(item_id)
        if item is None:
            logger.warning(f"Cannot comment on clearance item: {item_id} not found")
            return False

        item.comments = comments or None
        return True

    def is_complete(self) -> bool:
        """Whether every item is completed and signed."""
        return all(item.is_cleared for item in self._items.values())

    def pending_items(self) -> List[ClearanceItem]:
        """Items still missing completion or a signature, in catalog order."""
        return [item.model_copy() for item in self._items.values() if not item.is_cleared]

    def items(self) -> List[ClearanceItem]:
        """Copies of all items in catalog order."""
        return [item.model_copy() for item in self._items.values()]

    def get_progress_summary(self) -> Dict[str, int]:
        """Counts of completed, signed and fully cleared items."""
        values = list(self._items.values())
        return {
            "total_items": len(values),
            "completed": len([i for i in values if i.completed]),
            "signed": len([i for i in values if i.signature]),
            "cleared": len([i for i in values if i.is_cleared]),
        }
