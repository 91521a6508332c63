# src/tools/booklet.py
"""
Printable recipe booklet.

Layout (A4):
  page 1       cover with the recipe count
  page 2       table of contents
  page 3..n+2  one page per recipe, footer "<page> / <total>"

Each page is a single HTML box; content that would overflow is scaled down
so a recipe never spills onto a second page.
"""
from __future__ import annotations

import html
from typing import Any, Dict, Iterable, List, Sequence

import fitz  # PyMuPDF

from utils.recipes_repo import recipe_description, recipe_title

BOOKLET_FILENAME = "my-recipe-journal.pdf"
SUBTITLE = "A Collection of Kitchen Memories"

PINK_50 = "#fff1f2"
PINK_300 = "#f9a8d4"
MARGIN = 40

CSS = """
* { font-family: sans-serif; color: #334155; }
p { margin: 0; }
.cover-title { font-family: serif; font-size: 40px; color: #db2777; text-align: center; margin-bottom: 20px; }
.cover-subtitle { font-size: 18px; color: #94a3b8; font-style: italic; text-align: center; }
.cover-count { font-size: 14px; color: #f472b6; text-align: center; margin-top: 20px; }
.toc-title { font-family: serif; font-size: 24px; color: #db2777; text-align: center; margin-bottom: 20px; }
.toc-item { font-size: 14px; color: #475569; margin-bottom: 10px; }
.title { font-family: serif; font-size: 28px; color: #be185d; margin-bottom: 10px; }
.description { font-size: 12px; font-style: italic; color: #475569; background-color: #fffbeb;
               padding: 15px; margin-bottom: 20px; }
.section { font-size: 14px; color: #ec4899; font-weight: bold; margin-top: 15px; margin-bottom: 8px; }
.ingredient { font-size: 12px; margin-bottom: 6px; margin-left: 10px; }
.step { font-size: 12px; margin-bottom: 12px; }
.step-number { color: #f472b6; font-weight: bold; }
.page-number { font-size: 10px; color: #cbd5e1; text-align: center; }
"""


def _rgb(hex_color: str) -> tuple:
    h = hex_color.lstrip("#")
    return tuple(int(h[i:i + 2], 16) / 255 for i in (0, 2, 4))


def _e(text: Any) -> str:
    return html.escape(str(text))


def _count_label(n: int) -> str:
    return f"Contains {n} {'Recipe' if n == 1 else 'Recipes'}"


def cover_html(title: str, count: int) -> str:
    return (
        f'<p class="cover-title">{_e(title)}</p>'
        f'<p class="cover-subtitle">{_e(SUBTITLE)}</p>'
        f'<p class="cover-count">{_e(_count_label(count))}</p>'
    )


def toc_html(recipes: Sequence[Dict[str, Any]]) -> str:
    items = "".join(
        f'<p class="toc-item">{i}. {_e(recipe_title(r))}</p>'
        for i, r in enumerate(recipes, start=1)
    )
    return f'<p class="toc-title">Table of Contents</p>{items}'


def recipe_html(recipe: Dict[str, Any]) -> str:
    parts: List[str] = [f'<p class="title">{_e(recipe_title(recipe))}</p>']
    description = recipe_description(recipe)
    if description:
        parts.append(f'<p class="description">{_e(description)}</p>')

    parts.append('<p class="section">INGREDIENTS</p>')
    for ing in recipe.get("ingredients") or []:
        parts.append(f'<p class="ingredient">• {_e(ing)}</p>')

    parts.append('<p class="section">PREPARATION</p>')
    for i, step in enumerate(recipe.get("instructions") or [], start=1):
        parts.append(f'<p class="step"><span class="step-number">{i}. </span>{_e(step)}</p>')
    return "".join(parts)


def _new_page(doc: fitz.Document, background: str | None = None) -> fitz.Page:
    width, height = fitz.paper_size("a4")
    page = doc.new_page(width=width, height=height)
    if background:
        page.draw_rect(page.rect, color=None, fill=_rgb(background), width=0)
    return page


def _body_rect(page: fitz.Page, margin: float = MARGIN) -> fitz.Rect:
    r = page.rect
    # leave room for the page number footer
    return fitz.Rect(r.x0 + margin, r.y0 + margin, r.x1 - margin, r.y1 - margin - 20)


def _add_cover(doc: fitz.Document, title: str, count: int) -> None:
    page = _new_page(doc, background=PINK_50)
    frame = page.rect + (MARGIN + 10, MARGIN + 10, -MARGIN - 10, -MARGIN - 10)
    page.draw_rect(frame, color=_rgb(PINK_300), fill=(1, 1, 1), width=4, dashes="[8] 0")
    mid = frame.y0 + frame.height / 2
    text_box = fitz.Rect(frame.x0 + 20, mid - 120, frame.x1 - 20, mid + 120)
    page.insert_htmlbox(text_box, cover_html(title, count), css=CSS)


def _add_footer(page: fitz.Page, number: int, total: int) -> None:
    r = page.rect
    box = fitz.Rect(r.x0, r.y1 - 35, r.x1, r.y1 - 15)
    page.insert_htmlbox(box, f'<p class="page-number">{number} / {total}</p>', css=CSS)


def render_booklet(recipes: Iterable[Dict[str, Any]], title: str = "My Recipe Journal") -> bytes:
    """Render the journal as PDF bytes: cover, contents, then one page per recipe."""
    recipes = list(recipes)
    total = len(recipes) + 2

    doc = fitz.open()
    doc.set_metadata({"title": title, "creator": "Recipe Journal"})

    _add_cover(doc, title, len(recipes))

    toc = _new_page(doc)
    toc.insert_htmlbox(_body_rect(toc, margin=30), toc_html(recipes), css=CSS, scale_low=0)

    for number, recipe in enumerate(recipes, start=3):
        page = _new_page(doc)
        page.insert_htmlbox(_body_rect(page, margin=30), recipe_html(recipe), css=CSS, scale_low=0)
        _add_footer(page, number, total)

    data = doc.tobytes(deflate=True)
    doc.close()
    return data
