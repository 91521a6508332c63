# journal/menu.py
MENU = [
    {"label": "My Recipe Journal", "path": "Home.py"},
    {"label": "New Page", "path": "pages/1_capture_recipe.py"},
]
