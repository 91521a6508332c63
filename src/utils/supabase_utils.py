# src/utils/supabase_utils.py
"""
Secrets helper + Supabase client creator.

Resolution order for secrets:
1) st.secrets (Streamlit Cloud / local .streamlit/secrets.toml)
2) Environment variables (.env, Doppler CLI, GH Actions, Docker)

Aliases supported:
- SUPABASE_URL  or SUPABASE__URL
- SUPABASE_SERVICE_KEY  or SUPABASE_SERVICE_ROLE_KEY  or SUPABASE__SUPABASE_SERVICE_KEY  or SUPABASE_KEY
- MISTRAL_API_KEY  or MISTRAL__API_KEY
"""

from __future__ import annotations

import os
import streamlit as st
from supabase import create_client, Client
from dotenv import load_dotenv

load_dotenv()

SUPABASE_URL_NAMES = ("SUPABASE_URL", "SUPABASE__URL")
SUPABASE_KEY_NAMES = (
    "SUPABASE_SERVICE_KEY",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE__SUPABASE_SERVICE_KEY",
    "SUPABASE_KEY",
)

DEFAULT_VISION_MODEL = "pixtral-large-latest"


def sget(*names: str) -> str | None:
    """
    Return the first non-empty value among names,
    checking Streamlit secrets first, then environment.
    """
    for n in names:
        # Streamlit secrets; raises when no secrets.toml exists
        try:
            if hasattr(st, "secrets") and n in st.secrets:
                v = st.secrets[n]
                if v:
                    return str(v)
        except Exception:
            pass
        v = os.getenv(n)
        if v:
            return v
    return None


def _missing_msg(missing: list[str]) -> str:
    return (
        "Missing required secrets: "
        + ", ".join(missing)
        + "\nAdd them to .streamlit/secrets.toml or export them as env vars.\n"
        "Aliases supported for Supabase: SUPABASE__URL, SUPABASE_SERVICE_ROLE_KEY, "
        "SUPABASE__SUPABASE_SERVICE_KEY."
    )


@st.cache_resource(show_spinner=False)
def get_supabase_client() -> Client:
    """Create a cached Supabase client."""
    url = sget(*SUPABASE_URL_NAMES)
    key = sget(*SUPABASE_KEY_NAMES)

    missing = []
    if not url:
        missing.append("SUPABASE_URL")
    if not key:
        missing.append("SUPABASE_SERVICE_KEY")
    if missing:
        raise RuntimeError(_missing_msg(missing))

    return create_client(url, key)


# --- LLM settings -------------------------------------------------------------

def get_mistral_api_key(required: bool = True) -> str | None:
    """Returns Mistral key from secrets/env; raises if required and missing."""
    key = sget("MISTRAL_API_KEY", "MISTRAL__API_KEY")
    if required and not key:
        raise RuntimeError("Missing Mistral API key. Set MISTRAL_API_KEY in secrets or env.")
    return key


def get_vision_model() -> str:
    return sget("RECIPE_VISION_MODEL") or DEFAULT_VISION_MODEL


def ensure_llm_env() -> None:
    """
    Export the Mistral key to os.environ so SDKs that auto-read env work.
    No-op if already set.
    """
    m = get_mistral_api_key(required=False)
    if m and not os.getenv("MISTRAL_API_KEY"):
        os.environ["MISTRAL_API_KEY"] = m
