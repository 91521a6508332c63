# src/utils/recipes_repo.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from dateutil import parser as dtparser

from tools.recipe_schema import RecipeData

logger = logging.getLogger(__name__)

TABLE = "recipes"
UNTITLED = "Untitled Recipe"
NO_DESCRIPTION = "No description available."


# ---------- helpers ----------
def _clean_str(v) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    if s.lower() in ("", "null", "none"):
        return None
    return s


def _clean_list(values: List[str]) -> List[str]:
    return [s for s in (_clean_str(v) for v in values) if s]


def normalize_recipe(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Coerce extracted recipe JSON into the columns of the recipes table."""
    data = RecipeData.model_validate(payload or {})
    return {
        "title": _clean_str(data.title),
        "description": _clean_str(data.description),
        "ingredients": _clean_list(data.ingredients),
        "instructions": _clean_list(data.instructions),
    }


# ---------- display ----------
def recipe_title(row: Dict[str, Any]) -> str:
    return _clean_str(row.get("title")) or UNTITLED


def recipe_description(row: Dict[str, Any]) -> Optional[str]:
    return _clean_str(row.get("description"))


def recipe_blurb(row: Dict[str, Any]) -> str:
    return recipe_description(row) or NO_DESCRIPTION


def saved_on(row: Dict[str, Any]) -> Optional[str]:
    """created_at as e.g. 'March 4, 2025'; None when missing or unparseable."""
    val = row.get("created_at")
    if not val:
        return None
    try:
        dt = dtparser.parse(str(val))
    except (ValueError, OverflowError):
        return None
    return f"{dt:%B} {dt.day}, {dt.year}"


# ---------- public repo ops ----------
def insert_recipe(supabase, payload: Dict[str, Any], *, user_id: Optional[str]) -> Dict[str, Any]:
    row = {"user_id": user_id, **normalize_recipe(payload)}
    try:
        res = supabase.table(TABLE).insert(row).execute()
    except Exception as e:
        logger.error("Supabase Error: %s", e)
        raise RuntimeError("Failed to save to database") from e

    data = getattr(res, "data", None)
    if data:
        return data[0]
    return row


def list_recipes(supabase, *, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """Newest first; all rows when user_id is None."""
    q = supabase.table(TABLE).select("*")
    if user_id:
        q = q.eq("user_id", user_id)
    res = q.order("created_at", desc=True).execute()
    return getattr(res, "data", []) or []


def get_recipe(supabase, recipe_id) -> Optional[Dict[str, Any]]:
    res = supabase.table(TABLE).select("*").eq("id", recipe_id).limit(1).execute()
    data = getattr(res, "data", None)
    return data[0] if data else None


def delete_recipe(supabase, recipe_id) -> bool:
    res = supabase.table(TABLE).delete().eq("id", recipe_id).execute()
    deleted = bool(getattr(res, "data", None))
    logger.info("Deleted recipe %s: %s", recipe_id, deleted)
    return deleted
