# journal/ui.py
from __future__ import annotations
import html
import streamlit as st
from contextlib import contextmanager
from .menu import MENU

def inject_styles() -> None:
    """Base styles shared by all pages (sidebar + recipe cards)."""
    st.markdown(
        """
        <style>
          /* Card header/subtitle (the box is provided by st.container(border=True)) */
          .rj-card-header { font-family: var(--rj-hand); font-size: 1.5rem; font-weight: 700; margin: .15rem 0 .35rem; }
          .rj-card-sub { color: var(--rj-muted); font-size:.95rem; margin-top:-.2rem; margin-bottom:.35rem; }

          /* Sidebar look */
          [data-testid="stSidebar"] { padding-top: .8rem; }
          .rj-menu h3 {
            margin: 0 0 .75rem; font-size: 1rem; letter-spacing:.02em;
            text-transform: uppercase; opacity:.7;
          }

          /* Page links: rounded, with a clear active state (disabled=True) */
          [data-testid="stPageLinkContainer"] > a,
          [data-testid="stPageLinkContainer"] > button { border-radius: 10px; }
          [data-testid="stPageLinkContainer"] > a[aria-disabled="true"],
          [data-testid="stPageLinkContainer"] > button[disabled]{
              background: var(--rj-primary) !important;
              color: #fff !important;
              opacity: 1 !important;
          }
        </style>
        """,
        unsafe_allow_html=True,
    )

@contextmanager
def card(title: str, subtitle: str | None = None, *, border: bool = True):
    """
    Consistent panel used across pages.
    Uses Streamlit's bordered container to avoid stray empty <div>s.
    """
    with st.container(border=border):
        st.markdown(f'<div class="rj-card-header">{html.escape(title)}</div>', unsafe_allow_html=True)
        if subtitle:
            st.markdown(f'<div class="rj-card-sub">{html.escape(subtitle)}</div>', unsafe_allow_html=True)
        yield

def render_sidebar(active: str) -> None:
    """Build the left menu from MENU and highlight the active entry."""
    with st.sidebar:
        st.markdown('<div class="rj-menu"><h3>Recipe Journal</h3></div>', unsafe_allow_html=True)
        for item in MENU:
            st.page_link(item["path"], label=item["label"], disabled=(active == item["label"]))
