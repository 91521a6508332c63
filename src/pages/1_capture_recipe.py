import streamlit as st

from journal.theme import page_setup, page_header
from journal.session import set_flash
from journal.ui import card
from tools.pdf_pages import collect_images, is_pdf
from utils.digitize_client import digitize_images
from utils.owner_utils import current_owner_id


def run_capture():
    page_setup("New Page", page_title="Capture a Recipe")

    if st.button("‹ Back"):
        st.switch_page("Home.py")

    page_header("Capture a Recipe", "Upload PDFs, cookbook photos, or handwritten notes.")

    # ---------------------------------
    # 1. File Upload UI
    # ---------------------------------
    with card("Click to Select", "Supports Images & PDF. All files are read as ONE recipe."):
        uploaded = st.file_uploader(
            "Recipe pages",
            type=["jpg", "jpeg", "png", "webp", "pdf"],
            accept_multiple_files=True,
            label_visibility="collapsed",
        )

    if not uploaded:
        return

    previews = [f.getvalue() for f in uploaded if not is_pdf(f.name, f.type)]
    if previews:
        st.image(previews, width=160)

    # ---------------------------------
    # 2. Digitize (PDF pages -> images -> API)
    # ---------------------------------
    if not st.button("✨ Digitize Recipe", type="primary"):
        return

    with st.status("Reading files...", expanded=False) as status:
        try:
            if any(is_pdf(f.name, f.type) for f in uploaded):
                status.update(label="Scanning PDF pages...")
            images = collect_images((f.name, f.type, f.getvalue()) for f in uploaded)

            status.update(label="AI is reading the recipe...")
            recipe = digitize_images(images, current_owner_id())
        except Exception as e:
            status.update(label="Something went wrong", state="error")
            st.error(f"Something went wrong: {e}")
            return
        status.update(label=f"Saved “{recipe.get('title') or 'Untitled Recipe'}”", state="complete")

    set_flash(st.session_state, f"Added “{recipe.get('title') or 'Untitled Recipe'}” to your journal.")
    st.switch_page("Home.py")


run_capture()
