# journal/theme.py
from __future__ import annotations
import html
import streamlit as st
import os
from journal.ui import inject_styles as base_styles, render_sidebar
from journal.autostart_api import ensure_fastapi

# ---- Theme tokens (edit here to restyle the whole app) -----------------------
THEME = {
    "font_family": "Quicksand, system-ui, -apple-system, Segoe UI, Roboto",
    "hand_font": "'Patrick Hand', cursive",
    "bg": "#FDF2F8",            # app background (pink-50)
    "panel": "#FFFFFF",         # card background
    "primary": "#EC4899",       # pink-500
    "text": "#334155",
    "muted": "#94A3B8",
    "radius": "24px",
    "shadow": "0 4px 18px rgba(244, 114, 182, 0.15)",
}

def _inject_theme_css() -> None:
    """Define global CSS variables + primitives, then load base component styles."""
    st.markdown(
        f"""
        <style>
          @import url('https://fonts.googleapis.com/css2?family=Patrick+Hand&family=Quicksand:wght@400;500;600;700&display=swap');
          :root {{
            --rj-bg: {THEME['bg']};
            --rj-panel: {THEME['panel']};
            --rj-primary: {THEME['primary']};
            --rj-text: {THEME['text']};
            --rj-muted: {THEME['muted']};
            --rj-radius: {THEME['radius']};
            --rj-shadow: {THEME['shadow']};
            --rj-font: {THEME['font_family']};
            --rj-hand: {THEME['hand_font']};
          }}
          html, body, [data-testid="stAppViewContainer"] {{
            background: var(--rj-bg) !important;
            color: var(--rj-text);
            font-family: var(--rj-font);
          }}
          .stButton > button, .stDownloadButton > button {{
            background: var(--rj-primary);
            color:#fff; border:0; border-radius: var(--rj-radius);
            padding:.5rem 1.1rem; font-weight:700;
          }}
          .rj-header {{ text-align:center; margin-bottom: 1.5rem; }}
          .rj-header h1 {{ font-family: var(--rj-hand); font-size:2.6rem; margin:.25rem 0; }}
          .rj-header .tag {{
            color: #F472B6; font-weight:700; font-size:.85rem;
            text-transform:uppercase; letter-spacing:.15em;
          }}
          .rj-hand {{ font-family: var(--rj-hand); }}
          .rj-note {{
            background:#FEFCE8; border:1px solid #FEF9C3; border-radius:12px;
            padding:1.2rem 1.4rem; font-family: var(--rj-hand); font-size:1.25rem;
          }}
          .rj-step-number {{ font-family: var(--rj-hand); font-size:1.8rem; color:#F9A8D4; font-weight:700; }}
        </style>
        """,
        unsafe_allow_html=True,
    )
    base_styles()

def page_setup(active: str, page_title: str = "My Recipe Journal") -> None:
    st.set_page_config(page_title=page_title, page_icon="📖", layout="centered")
    _inject_theme_css()
    render_sidebar(active)

    # Auto-start the digitize API (idempotent; cached)
    info = ensure_fastapi()
    if os.getenv("RJ_API_SHOW_STATUS", "0").lower() in ("1", "true", "yes"):
        st.sidebar.caption(f"API: {info['status']} → {info['url'] or 'disabled'}")

def page_header(title: str, tag: str = "") -> None:
    """Uniform centered page header."""
    st.markdown(
        f'<div class="rj-header"><h1>{html.escape(title)}</h1><div class="tag">{html.escape(tag)}</div></div>',
        unsafe_allow_html=True,
    )
