"""Inspect and edit the calculation history."""

import logging
from typing import Literal, Optional

from history import get_default_store
from utils.json_helpers import safe_json_dumps

logger = logging.getLogger("fluidcalc-mcp.history_tool")


def calculation_history(
    action: Literal["list", "remove", "clear"] = "list",
    entry_id: Optional[int] = None,
) -> str:
    """List, remove or clear recorded calculations (newest first, at most 25).

    Args:
        action: 'list' the entries, 'remove' one entry by id, or 'clear' them all
        entry_id: Id of the entry to remove

    Returns:
        JSON string with the remaining entries
    """
    try:
        store = get_default_store()
        response = {}
        if action == "remove":
            if entry_id is None:
                return safe_json_dumps({"error": "entry_id is required to remove an entry"})
            response["removed"] = store.remove(entry_id)
        elif action == "clear":
            store.clear()
            response["cleared"] = True
        elif action != "list":
            return safe_json_dumps({"error": f"Invalid action: {action}"})

        response["count"] = len(store)
        response["entries"] = store.entries
        return safe_json_dumps(response)

    except Exception as e:
        logger.error(f"Error in calculation_history: {e}", exc_info=True)
        return safe_json_dumps({"error": str(e)})
