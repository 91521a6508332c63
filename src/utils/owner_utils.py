import re
import uuid
import streamlit as st
from utils.supabase_utils import get_supabase_client


def is_valid_email(email):
    return re.match(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$", email or "")


def fetch_or_insert_owner_id(supabase, email: str) -> str:
    """Insert email into visitors (if needed), return its id as the journal owner."""
    if not email:
        return None

    # Step 1: Try fetch
    result = supabase.table("visitors").select("id").eq("email", email).limit(1).execute()
    if result.data:
        return result.data[0]["id"]

    # Step 2: Insert
    insert = supabase.table("visitors").insert({"email": email}).execute()
    return insert.data[0]["id"]


def current_owner_id() -> str:
    """
    Owner reference for this session: the visitor id bound to an email,
    otherwise an anonymous id that lives as long as the session.
    """
    owner = st.session_state.get("visitor_id")
    if owner:
        return str(owner)
    if "anon_owner_id" not in st.session_state:
        st.session_state["anon_owner_id"] = str(uuid.uuid4())
    return st.session_state["anon_owner_id"]


def prompt_for_owner_email():
    email = st.sidebar.text_input(
        "Email (optional, keeps your journal across visits)",
        value=st.session_state.get("user_email", ""),
        placeholder="you@example.com",
    )
    if email and is_valid_email(email):
        if email != st.session_state.get("user_email"):
            st.session_state["user_email"] = email
            st.session_state["visitor_id"] = fetch_or_insert_owner_id(get_supabase_client(), email)
    elif email:
        st.sidebar.warning("Please enter a valid email.")
    else:
        st.session_state["user_email"] = ""
        st.session_state["visitor_id"] = None
    return st.session_state.get("user_email", "")
