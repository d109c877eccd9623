"""Streamlit admin console for the portfolio site."""

import json
import os
import streamlit as st
from typing import Any, Dict, Optional
from unfold.models.cv_models import CVSectionType, DEFAULT_SECTION_TITLES
from unfold.services.admin_client import AdminAPIError, AdminClient
from unfold.utils.rich_text import count_characters, count_words

# Configuration
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

# Page configuration
st.set_page_config(
    page_title="Portfolio Admin",
    page_icon="🗂️",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #1f77b4;
        margin-bottom: 1rem;
    }
</style>
""", unsafe_allow_html=True)


def run_action(label: str, action, *args, **kwargs) -> Optional[Any]:
    """
    Call the admin API and report the outcome in the page.

    Returns:
        The action's result, or None if the API rejected it
    """
    try:
        result = action(*args, **kwargs)
    except AdminAPIError as e:
        st.error(f"{label} failed: {e.detail}")
        return None
    st.success(f"{label}: done")
    return result


def parse_json(text: str) -> Optional[Dict[str, Any]]:
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        st.error(f"Invalid JSON: {e}")
        return None
    if not isinstance(value, dict):
        st.error("Expected a JSON object")
        return None
    return value


def profile_tab(client: AdminClient, data: Dict[str, Any]) -> None:
    profile = data["userProfile"]
    with st.form("profile_form"):
        name = st.text_input("Name", value=profile.get("name", ""))
        tagline = st.text_input("Tagline", value=profile.get("tagline", ""))
        email = st.text_input("Email", value=profile.get("email", ""))
        location = st.text_input("Location", value=profile.get("location") or "")
        picture = st.text_input("Profile picture URL", value=profile.get("profilePictureUrl", ""))
        if st.form_submit_button("Save profile", type="primary"):
            run_action("Save profile", client.update_profile, {
                "name": name,
                "tagline": tagline,
                "email": email,
                "location": location,
                "profilePictureUrl": picture,
            })

    uploaded = st.file_uploader("Upload an image", type=["jpg", "jpeg", "png", "webp", "svg", "gif"])
    if uploaded is not None and st.button("Upload"):
        result = run_action(
            "Upload", client.upload_image, uploaded.name, uploaded.getvalue(), uploaded.type
        )
        if result:
            st.code(result["path"])


def projects_tab(client: AdminClient, data: Dict[str, Any]) -> None:
    for project in data["portfolio"].get("projects", []):
        with st.expander(f"{project['title']} ({project['slug']})"):
            description = project.get("longDescription")
            st.caption(
                f"{count_words(description)} words, {count_characters(description)} characters"
            )
            patch_text = st.text_area(
                "Patch (JSON)",
                value="{}",
                key=f"project_patch_{project['slug']}"
            )
            col1, col2 = st.columns(2)
            if col1.button("Update", key=f"project_update_{project['slug']}"):
                patch = parse_json(patch_text)
                if patch is not None:
                    run_action("Update project", client.update_project, project["slug"], patch)
            if col2.button("Delete", key=f"project_delete_{project['slug']}"):
                run_action("Delete project", client.delete_project, project["slug"])

    with st.form("new_project_form"):
        st.subheader("New project")
        title = st.text_input("Title")
        date = st.text_input("Date", placeholder="2024-05")
        short_description = st.text_area("Short description")
        if st.form_submit_button("Create project", type="primary"):
            slug = run_action("Create project", client.create_project, {
                "title": title,
                "date": date,
                "shortDescription": short_description,
            })
            if slug:
                st.info(f"Slug: {slug}")


def vocabulary_tab(client: AdminClient, vocabulary: str) -> None:
    entries = client.list_vocabulary(vocabulary)
    st.write(", ".join(entries) or "No entries yet")
    new_entry = st.text_input("Add", key=f"{vocabulary}_add")
    if st.button("Add entry", key=f"{vocabulary}_add_button") and new_entry:
        run_action("Add entry", client.add_vocabulary_entry, vocabulary, new_entry)

    if entries:
        selected = st.selectbox("Entry", entries, key=f"{vocabulary}_selected")
        new_name = st.text_input("Rename to", key=f"{vocabulary}_rename")
        col1, col2 = st.columns(2)
        if col1.button("Rename", key=f"{vocabulary}_rename_button") and new_name:
            run_action("Rename entry", client.rename_vocabulary_entry, vocabulary, selected, new_name)
        if col2.button("Remove", key=f"{vocabulary}_remove_button"):
            run_action("Remove entry", client.remove_vocabulary_entry, vocabulary, selected)


def cv_tab(client: AdminClient) -> None:
    cv = client.get_cv()
    sections = cv.get("sections", [])

    for section in sections:
        state = "visible" if section.get("isVisible", True) else "hidden"
        with st.expander(f"{section['title']} [{section['type']}, {state}]"):
            st.json(section.get("items", []))
            col1, col2, col3 = st.columns(3)
            if col1.button("Toggle visibility", key=f"toggle_{section['id']}"):
                run_action("Toggle visibility", client.toggle_section_visibility, section["id"])
            if col2.button("Delete section", key=f"delete_{section['id']}"):
                run_action("Delete section", client.delete_section, section["id"])

            item_text = st.text_area("New item (JSON)", value="{}", key=f"item_{section['id']}")
            if col3.button("Add item", key=f"add_item_{section['id']}"):
                item = parse_json(item_text)
                if item is not None:
                    run_action("Add item", client.create_item, section["id"], item)

    st.subheader("Section order")
    order = st.text_input(
        "Section IDs, comma separated",
        value=", ".join(section["id"] for section in sections)
    )
    if st.button("Apply order"):
        ids = [value.strip() for value in order.split(",") if value.strip()]
        run_action("Reorder sections", client.reorder_sections, ids)

    st.subheader("New section")
    section_type = st.selectbox("Type", [t.value for t in CVSectionType])
    default_title = DEFAULT_SECTION_TITLES.get(CVSectionType(section_type), "")
    title = st.text_input("Title", value=default_title, key=f"new_section_title_{section_type}")
    if st.button("Create section", type="primary"):
        run_action("Create section", client.create_section, section_type, title or None)


def main():
    """Main Streamlit app."""

    # Header
    st.markdown('<div class="main-header">🗂️ Portfolio Admin</div>', unsafe_allow_html=True)

    with st.sidebar:
        st.header("🔧 Configuration")
        api_url = st.text_input(
            "API URL",
            value=API_BASE_URL,
            help="Base URL of the FastAPI server"
        )

        st.divider()

        st.header("🔍 Server status")
        client = AdminClient(api_url)
        if client.health():
            st.success("✅ Server is running")
        else:
            st.error("❌ Server is not running")
            st.info("💡 Start it with `uvicorn unfold.main:app` and `UNFOLD_ADMIN_MODE=true`")
            return

    try:
        data = client.get_data()
    except AdminAPIError as e:
        st.error(f"Could not load the site data: {e.detail}")
        return

    profile, projects, technologies, roles, cv = st.tabs(
        ["Profile", "Projects", "Technologies", "Roles", "CV"]
    )
    with profile:
        profile_tab(client, data)
    with projects:
        projects_tab(client, data)
    with technologies:
        vocabulary_tab(client, "technologies")
    with roles:
        vocabulary_tab(client, "roles")
    with cv:
        cv_tab(client)


if __name__ == "__main__":
    main()
