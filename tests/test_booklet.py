import fitz  # PyMuPDF
import pytest

from tools.booklet import recipe_html, render_booklet


def _open(data: bytes) -> fitz.Document:
    return fitz.open(stream=data, filetype="pdf")


def _recipes(n):
    return [
        {
            "id": i,
            "title": f"Recipe {i}",
            "description": f"Family favourite number {i}.",
            "ingredients": ["1 egg", "2 cups flour"],
            "instructions": ["Mix.", "Bake."],
        }
        for i in range(1, n + 1)
    ]


@pytest.mark.parametrize("n", (0, 1, 3))
def test_one_page_per_recipe_plus_cover_and_contents(n):
    with _open(render_booklet(_recipes(n))) as doc:
        assert doc.page_count == n + 2


def test_cover_and_contents():
    with _open(render_booklet(_recipes(2))) as doc:
        cover = doc[0].get_text()
        assert "My Recipe Journal" in cover
        assert "Contains 2 Recipes" in cover

        toc = doc[1].get_text()
        assert "Table of Contents" in toc
        assert "1. Recipe 1" in toc
        assert "2. Recipe 2" in toc


def test_singular_recipe_count():
    with _open(render_booklet(_recipes(1))) as doc:
        assert "Contains 1 Recipe" in doc[0].get_text()
        assert "Recipes" not in doc[0].get_text()


def test_recipe_page_content_and_footer():
    recipe = {
        "id": 7,
        "title": None,
        "description": None,
        "ingredients": ["3 ripe bananas"],
        "instructions": ["Mash the bananas."],
    }
    with _open(render_booklet([recipe])) as doc:
        text = doc[2].get_text()
        assert "Untitled Recipe" in text
        assert "3 ripe bananas" in text
        assert "Mash the bananas." in text
        assert "3 / 3" in text
        assert "Untitled Recipe" in doc[1].get_text()


def test_long_recipe_still_fits_on_one_page():
    recipe = {
        "id": 1,
        "title": "Holiday Feast",
        "description": "Everything at once.",
        "ingredients": [f"ingredient number {i}" for i in range(120)],
        "instructions": [f"Do step {i} very carefully and slowly." for i in range(80)],
    }
    with _open(render_booklet([recipe])) as doc:
        assert doc.page_count == 3
        assert "Do step 79" in doc[2].get_text()


def test_markup_in_recipe_text_is_escaped():
    recipe = {"id": 1, "title": "Fish & <Chips>", "ingredients": [], "instructions": []}
    with _open(render_booklet([recipe])) as doc:
        assert "Fish & <Chips>" in doc[2].get_text()


def test_blank_description_is_omitted():
    assert 'class="description"' not in recipe_html({"title": "Toast", "description": "   "})
    assert 'class="description"' in recipe_html({"title": "Toast", "description": "Golden."})
