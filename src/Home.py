import streamlit as st
import sys, os

sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))          # /app/src
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # /app

from journal.theme import page_setup, page_header
from journal.session import cancel_delete, pop_flash
from journal.ui import card
from tools.booklet import BOOKLET_FILENAME, render_booklet
from utils.owner_utils import current_owner_id, prompt_for_owner_email
from utils.recipes_repo import list_recipes, recipe_blurb, recipe_title, saved_on
from utils.supabase_utils import get_supabase_client, ensure_llm_env


def doppler_bootstrap():
    try:
        DT = st.secrets.get("DOPPLER_TOKEN")
        DP = st.secrets.get("DOPPLER_PROJECT")
        DC = st.secrets.get("DOPPLER_CONFIG")
    except FileNotFoundError:
        return  # no secrets.toml locally
    if not (DT and DP and DC):
        return  # Safe no-op locally or if Doppler not configured

    import requests
    r = requests.get(
        "https://api.doppler.com/v3/configs/config/secrets",
        params={"project": DP, "config": DC},
        headers={"Authorization": f"Bearer {DT}"},
        timeout=10,
    )
    r.raise_for_status()
    secrets = r.json().get("secrets", {})

    # Map Doppler names -> standard names the app expects
    ALIASES = {
        # LLM
        "MISTRAL__API__KEY": "MISTRAL_API_KEY",
        "MISTRAL__API_KEY":  "MISTRAL_API_KEY",
        "MISTRAL_API_KEY":   "MISTRAL_API_KEY",
        # Supabase
        "SUPABASE__URL":                      "SUPABASE_URL",
        "SUPABASE_URL":                       "SUPABASE_URL",
        "SUPABASE__SUPABASE_SERVICE_KEY":     "SUPABASE_SERVICE_KEY",
        "SUPABASE_SERVICE_ROLE_KEY":          "SUPABASE_SERVICE_KEY",
        "SUPABASE_SERVICE_KEY":               "SUPABASE_SERVICE_KEY",
        "SUPABASE_KEY":                       "SUPABASE_SERVICE_KEY",
    }

    for k, v in secrets.items():
        val = v.get("computed") if isinstance(v, dict) else v
        if not val:
            continue
        target = ALIASES.get(k, k)  # normalize when we know the alias
        if not os.getenv(target):   # do NOT clobber existing env
            os.environ[target] = str(val)


@st.cache_data(show_spinner=False)
def booklet_bytes(recipes: list) -> bytes:
    return render_booklet(recipes)


def open_recipe(recipe_id) -> None:
    st.session_state["selected_recipe_id"] = recipe_id
    cancel_delete(st.session_state)
    st.switch_page("pages/2_recipe_reader.py")


doppler_bootstrap()
ensure_llm_env()

page_setup("My Recipe Journal")
prompt_for_owner_email()

supabase = get_supabase_client()
owner_id = current_owner_id()

try:
    recipes = list_recipes(supabase, user_id=owner_id)
except Exception as e:
    st.warning(f"⚠️ Could not load your recipes: {e}")
    recipes = []

n = len(recipes)
page_header("Kitchen Collection", f"{n} {'Memory' if n == 1 else 'Memories'} Saved")

flash = pop_flash(st.session_state)
if flash:
    st.success(f"✅ {flash}")

top_left, top_right = st.columns([3, 1])
with top_right:
    if recipes:
        st.download_button(
            "⬇️ PDF",
            data=booklet_bytes(recipes),
            file_name=BOOKLET_FILENAME,
            mime="application/pdf",
        )
with top_left:
    if st.button("➕ New Page"):
        st.switch_page("pages/1_capture_recipe.py")

if not recipes:
    with card("Your journal is empty!", "Take a picture of Grandma's recipe card or your favorite cookbook page."):
        if st.button("Add First Recipe", type="primary"):
            st.switch_page("pages/1_capture_recipe.py")
else:
    cols = st.columns(3)
    for i, r in enumerate(recipes):
        with cols[i % 3]:
            with card(recipe_title(r), recipe_blurb(r)):
                when = saved_on(r)
                if when:
                    st.caption(f"Saved {when}")
                if st.button("OPEN ›", key=f"open-{r['id']}"):
                    open_recipe(r["id"])
