# journal/session.py
"""Small helpers over st.session_state; any MutableMapping works."""
from __future__ import annotations
from typing import Any, MutableMapping, Optional

CONFIRM_DELETE = "confirm_delete"
FLASH = "flash"


# ---- Remove confirmation -----------------------------------------------------
def request_delete(state: MutableMapping[str, Any], recipe_id) -> None:
    """Ask for confirmation before removing this recipe (and only this one)."""
    state[CONFIRM_DELETE] = recipe_id


def delete_pending(state: MutableMapping[str, Any], recipe_id) -> bool:
    return recipe_id is not None and state.get(CONFIRM_DELETE) == recipe_id


def cancel_delete(state: MutableMapping[str, Any]) -> None:
    state.pop(CONFIRM_DELETE, None)


# ---- One-shot messages across st.switch_page ----------------------------------
def set_flash(state: MutableMapping[str, Any], message: str) -> None:
    state[FLASH] = message


def pop_flash(state: MutableMapping[str, Any]) -> Optional[str]:
    return state.pop(FLASH, None)
