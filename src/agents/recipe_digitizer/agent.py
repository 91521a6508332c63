# src/agents/recipe_digitizer/agent.py

import logging
from typing import TypedDict, Optional, Dict, Any, List

from dotenv import load_dotenv
from langchain_core.runnables import RunnableConfig
from langgraph.graph import StateGraph, END

from tools.recipe_extraction import ProcessRecipeTool
from utils.recipes_repo import insert_recipe
from utils.supabase_utils import get_supabase_client

load_dotenv()

logger = logging.getLogger(__name__)


# ---- LangGraph state ----------------------------------------------------------
class DigitizeState(TypedDict, total=False):
    images: List[str]
    user_id: Optional[str]
    recipe: dict
    row: dict


recipe_tool = ProcessRecipeTool()


def extract_recipe(state: DigitizeState) -> DigitizeState:
    """Step 1: Read all images of the recipe in one model call."""
    recipe = recipe_tool.run({"images": state["images"]})
    return {"recipe": recipe}


def save_recipe(state: DigitizeState, config: RunnableConfig) -> DigitizeState:
    """Step 2: Persist the structured recipe as a new row."""
    supabase = (config.get("configurable") or {}).get("supabase") or get_supabase_client()
    row = insert_recipe(supabase, state["recipe"], user_id=state.get("user_id"))
    return {"row": row}


# ---- Build graph --------------------------------------------------------------
workflow = StateGraph(DigitizeState)
workflow.add_node("extract_recipe", extract_recipe)
workflow.add_node("save_recipe", save_recipe)
workflow.set_entry_point("extract_recipe")
workflow.add_edge("extract_recipe", "save_recipe")
workflow.add_edge("save_recipe", END)

app = workflow.compile()


# ---- Public entrypoint --------------------------------------------------------
def digitize_recipe(
    images: List[str],
    user_id: Optional[str] = None,
    supabase=None,
) -> Dict[str, Any]:
    """
    Runs the graph for one submission:
        app.invoke({"images": [...], "user_id": ...})
    Returns {"recipe": <extracted JSON>, "row": <inserted row>}.
    """
    if not images:
        raise ValueError("No images provided")

    configurable = {"supabase": supabase} if supabase is not None else {}
    result = app.invoke(
        {"images": list(images), "user_id": user_id},
        config={"configurable": configurable},
    )
    logger.info("Saved recipe %r for user %s", result["recipe"].get("title"), user_id)
    return {"recipe": result["recipe"], "row": result["row"]}
