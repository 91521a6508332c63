import html
import streamlit as st

from journal.theme import page_setup
from journal.session import cancel_delete, delete_pending, request_delete, set_flash
from utils.recipes_repo import delete_recipe, get_recipe, recipe_description, recipe_title, saved_on
from utils.supabase_utils import get_supabase_client


def run_reader():
    page_setup("Recipe", page_title="Recipe Reader")
    supabase = get_supabase_client()

    recipe_id = st.session_state.get("selected_recipe_id")
    recipe = get_recipe(supabase, recipe_id) if recipe_id is not None else None
    if not recipe:
        st.info("Pick a recipe from your journal first.")
        if st.button("‹ Back"):
            st.switch_page("Home.py")
        return

    left, right = st.columns([3, 1])
    if left.button("‹ Back"):
        cancel_delete(st.session_state)
        st.switch_page("Home.py")

    # ---------------------------------
    # Remove (two-step confirm, bound to this recipe)
    # ---------------------------------
    with right:
        if not delete_pending(st.session_state, recipe["id"]):
            if st.button("🗑️ Remove"):
                request_delete(st.session_state, recipe["id"])
                st.rerun()
        else:
            st.warning("Are you sure you want to remove this recipe from your journal?")
            yes, no = st.columns(2)
            if yes.button("Yes, remove"):
                cancel_delete(st.session_state)
                try:
                    delete_recipe(supabase, recipe["id"])
                except Exception as e:
                    st.error(f"Error deleting: {e}")
                    return
                st.session_state.pop("selected_recipe_id", None)
                set_flash(st.session_state, f"Removed “{recipe_title(recipe)}” from your journal.")
                st.switch_page("Home.py")
            if no.button("Keep"):
                cancel_delete(st.session_state)
                st.rerun()

    st.markdown(f'<h1 class="rj-hand">{html.escape(recipe_title(recipe))}</h1>', unsafe_allow_html=True)
    when = saved_on(recipe)
    if when:
        st.caption(f"Saved {when}")

    description = recipe_description(recipe)
    if description:
        st.markdown(f'<div class="rj-note">{html.escape(description)}</div>', unsafe_allow_html=True)

    st.subheader("⭐ Ingredients")
    for i, ing in enumerate(recipe.get("ingredients") or []):
        st.checkbox(ing, key=f"ing-{recipe['id']}-{i}")

    st.subheader("👩‍🍳 Preparation")
    for i, step in enumerate(recipe.get("instructions") or [], start=1):
        num, text = st.columns([1, 9])
        num.markdown(f'<span class="rj-step-number">{i}.</span>', unsafe_allow_html=True)
        text.write(step)


run_reader()
