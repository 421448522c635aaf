"""
Streamlit Student Registration

A single-user web application for registering students, searching and
filtering the register, and exporting it to CSV, JSON or Excel.
"""

import streamlit as st
import json
import os

from loguru import logger

from registry import (
    load_config,
    merge_config,
    validate_config,
    configure_logging,
    LocalStorage,
    RecordStore,
    StatusBoard,
    filter_records,
    record_at,
    stats_line,
    empty_state_message,
    records_to_frame,
    export_records,
    validate_field_live,
    missing_required_fields,
    normalize_form,
    RegistryError,
    ValidationError,
    EmptyExportError,
    PersistenceError,
)


# Page configuration
st.set_page_config(
    page_title="Student Registration",
    page_icon="🎓",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# Custom CSS for better styling
st.markdown("""
<style>
    .field-error {
        color: #dc3545;
        font-size: 0.85rem;
        margin-top: -0.75rem;
        margin-bottom: 0.5rem;
    }
    .empty-state {
        text-align: center;
        color: #6c757d;
        padding: 2rem 0;
    }
</style>
""", unsafe_allow_html=True)

FORM_FIELDS = ["name", "email", "contact", "studentId", "course", "year"]
FIELD_LABELS = {
    "name": "Student Name",
    "email": "Email ID",
    "contact": "Contact No.",
    "studentId": "Student ID",
    "course": "Course",
    "year": "Year",
}

# Banners are re-checked this often so they disappear without user input
MESSAGE_REFRESH_SECONDS = 1


def init_session_state():
    """Initialize session state with the configured store and message board."""
    if "config" not in st.session_state:
        config_path = os.getenv("STUDENT_REGISTRY_CONFIG", "config.json")
        st.session_state.config = load_config(config_path)
        configure_logging(st.session_state.config)

    if "store" not in st.session_state:
        open_store()

    if "board" not in st.session_state:
        st.session_state.board = StatusBoard(st.session_state.config["messages"]["ttl_seconds"])

    if "field_errors" not in st.session_state:
        st.session_state.field_errors = {}

    if "edit_errors" not in st.session_state:
        st.session_state.edit_errors = {}

    if "edit_record_id" not in st.session_state:
        st.session_state.edit_record_id = None

    if "pending_removal" not in st.session_state:
        st.session_state.pending_removal = None

    for field in FORM_FIELDS:
        if f"form_{field}" not in st.session_state:
            st.session_state[f"form_{field}"] = ""


def open_store():
    """(Re)build the record store from the storage settings in the current config."""
    storage_config = st.session_state.config["storage"]
    storage = LocalStorage(storage_config["path"], storage_config.get("quota_bytes"))
    st.session_state.store = RecordStore(storage, key=storage_config["key"])


def show_message(text: str, kind: str = "info"):
    st.session_state.board.post(text, kind)


def get_form_data(prefix: str) -> dict:
    """Read the form widgets under the given key prefix."""
    return {field: st.session_state.get(f"{prefix}_{field}", "") or "" for field in FORM_FIELDS}


def get_view() -> list[dict]:
    """Compute the filtered view from the current search box and dropdowns."""
    return filter_records(
        st.session_state.store.list(),
        search_term=st.session_state.get("search_term", ""),
        course=st.session_state.get("course_filter", ""),
        year=st.session_state.get("year_filter", ""),
    )


# ────────────────────────────────────────────────────────────────────────────────
# Event handlers
# ────────────────────────────────────────────────────────────────────────────────

def clear_form():
    for field in FORM_FIELDS:
        st.session_state[f"form_{field}"] = ""
    st.session_state.field_errors = {}


def handle_form_submission():
    """Register a new student from the form."""
    data = get_form_data("form")
    st.session_state.field_errors = {}

    if missing_required_fields(normalize_form(data)):
        show_message("Please fill in all required fields!", "error")

    try:
        st.session_state.store.add(data)
    except ValidationError as e:
        st.session_state.field_errors = e.errors
        return
    except PersistenceError as e:
        # The student is registered in memory; only the save failed
        clear_form()
        show_message(e.message, "error")
        return
    except RegistryError as e:
        show_message(e.message, "error")
        return

    clear_form()
    show_message("Student registered successfully!", "success")


def start_edit(index: int):
    try:
        record = record_at(get_view(), index)
    except RegistryError as e:
        show_message(e.message, "error")
        return

    for field in FORM_FIELDS:
        st.session_state[f"edit_{field}"] = record.get(field) or ""
    st.session_state.edit_record_id = record["id"]
    st.session_state.edit_errors = {}


def close_edit():
    st.session_state.edit_record_id = None
    st.session_state.edit_errors = {}


def handle_edit_submission():
    data = get_form_data("edit")
    st.session_state.edit_errors = {}

    if missing_required_fields(normalize_form(data)):
        show_message("Please fill in all required fields!", "error")

    try:
        st.session_state.store.update(st.session_state.edit_record_id, data)
    except ValidationError as e:
        st.session_state.edit_errors = e.errors
        return
    except PersistenceError as e:
        close_edit()
        show_message(e.message, "error")
        return
    except RegistryError as e:
        show_message(e.message, "error")
        return

    close_edit()
    show_message("Student updated successfully!", "success")


def request_delete(index: int):
    try:
        record = record_at(get_view(), index)
        st.session_state.pending_removal = st.session_state.store.request_removal(record["id"])
    except RegistryError as e:
        show_message(e.message, "error")


def confirm_delete():
    pending = st.session_state.pending_removal
    st.session_state.pending_removal = None
    if pending is None:
        return
    if st.session_state.edit_record_id == pending.record_id:
        close_edit()
    try:
        pending.confirm()
    except RegistryError as e:
        # A PersistenceError still leaves the student deleted in memory
        show_message(e.message, "error")
        return
    show_message("Student deleted successfully!", "success")


def cancel_delete():
    pending = st.session_state.pending_removal
    if pending is not None:
        pending.cancel()
    st.session_state.pending_removal = None


def report_empty_export():
    show_message(EmptyExportError().message, "error")


# ────────────────────────────────────────────────────────────────────────────────
# Rendering
# ────────────────────────────────────────────────────────────────────────────────

def render_field_error(message):
    if message:
        st.markdown(f'<div class="field-error">{message}</div>', unsafe_allow_html=True)


@st.fragment(run_every=MESSAGE_REFRESH_SECONDS)
def render_messages():
    """Show live status banners; the timed rerun drops them once they expire."""
    for message in st.session_state.board.active():
        if message.kind == "success":
            st.success(message.text)
        elif message.kind == "error":
            st.error(message.text)
        else:
            st.info(message.text)


def render_sidebar():
    """Render a minimal sidebar for config access."""
    st.sidebar.header("Settings")

    uploaded_config = st.sidebar.file_uploader(
        "Upload config JSON",
        type=["json"],
        key="sidebar_config_uploader",
        help="Override storage location, dropdown options and export settings"
    )

    if uploaded_config is not None and uploaded_config.file_id != st.session_state.get("config_file_id"):
        try:
            user_config = json.load(uploaded_config)
        except json.JSONDecodeError:
            st.sidebar.error("Invalid JSON file")
        else:
            st.session_state.config_file_id = uploaded_config.file_id
            st.session_state.config = merge_config(user_config)
            configure_logging(st.session_state.config)
            st.session_state.board.ttl_seconds = st.session_state.config["messages"]["ttl_seconds"]
            open_store()
            logger.info("Configuration replaced from uploaded file")
            st.sidebar.success("✓ Config loaded!")

    for issue in validate_config(st.session_state.config):
        if issue["type"] == "warning":
            st.sidebar.warning(f"⚠️ {issue['message']}")
        else:
            st.sidebar.error(f"❌ {issue['message']}")

    st.sidebar.download_button(
        "📥 Download Config",
        data=json.dumps(st.session_state.config, indent=2),
        file_name="student_registry_config.json",
        mime="application/json"
    )

    if st.session_state.store.memory_only:
        st.sidebar.warning("Changes are not being saved; working in memory only.")


def render_registration_form():
    """Render the registration form with per-field validation as the user types."""
    config = st.session_state.config
    errors = st.session_state.field_errors

    st.header("Register Student")

    for field in ("name", "email", "contact", "studentId"):
        value = st.text_input(FIELD_LABELS[field], key=f"form_{field}")
        render_field_error(errors.get(field) or validate_field_live(field, value))

    st.selectbox(
        FIELD_LABELS["course"],
        options=[""] + config["form"]["courses"],
        format_func=lambda c: c or "Select course",
        key="form_course"
    )
    st.selectbox(
        FIELD_LABELS["year"],
        options=[""] + config["form"]["years"],
        format_func=lambda y: y or "Select year",
        key="form_year"
    )

    col1, col2 = st.columns(2)
    with col1:
        st.button(
            "Register Student",
            type="primary",
            on_click=handle_form_submission,
            key="register",
            use_container_width=True
        )
    with col2:
        st.button("Clear Form", on_click=clear_form, use_container_width=True)


def render_edit_form():
    """Render the edit panel for the record being edited, if any."""
    record_id = st.session_state.edit_record_id
    if record_id is None:
        return

    config = st.session_state.config
    errors = st.session_state.edit_errors

    with st.container(border=True):
        st.subheader("Edit Student")

        for field in ("name", "email", "contact", "studentId"):
            st.text_input(FIELD_LABELS[field], key=f"edit_{field}")
            render_field_error(errors.get(field))

        courses = [""] + config["form"]["courses"]
        if st.session_state.get("edit_course") not in courses:
            courses.append(st.session_state.edit_course)
        st.selectbox(FIELD_LABELS["course"], options=courses, format_func=lambda c: c or "Select course", key="edit_course")

        years = [""] + config["form"]["years"]
        if st.session_state.get("edit_year") not in years:
            years.append(st.session_state.edit_year)
        st.selectbox(FIELD_LABELS["year"], options=years, format_func=lambda y: y or "Select year", key="edit_year")

        col1, col2 = st.columns(2)
        with col1:
            st.button("Update Student", type="primary", on_click=handle_edit_submission, use_container_width=True)
        with col2:
            st.button("Cancel", on_click=close_edit, key="cancel_edit", use_container_width=True)


def render_delete_confirmation():
    pending = st.session_state.pending_removal
    if pending is None:
        return

    st.warning(pending.prompt)
    col1, col2, _ = st.columns([1, 1, 4])
    with col1:
        st.button("Delete", type="primary", on_click=confirm_delete, key="confirm_delete")
    with col2:
        st.button("Cancel", on_click=cancel_delete, key="cancel_delete")


def render_table():
    """Render search, filters, the student table and export buttons."""
    config = st.session_state.config
    store = st.session_state.store

    st.header("Registered Students")

    col1, col2, col3 = st.columns([2, 1, 1])
    with col1:
        st.text_input("Search", key="search_term", placeholder="Search by name, email, ID or contact")
    with col2:
        st.selectbox(
            "Course",
            options=[""] + config["form"]["courses"],
            format_func=lambda c: c or "All Courses",
            key="course_filter"
        )
    with col3:
        st.selectbox(
            "Year",
            options=[""] + config["form"]["years"],
            format_func=lambda y: y or "All Years",
            key="year_filter"
        )

    view = get_view()
    st.caption(stats_line(len(store), len(view)))

    render_delete_confirmation()

    if not view:
        st.markdown(f"""
<div class="empty-state">
    <h3>No students found</h3>
    <p>{empty_state_message(len(store))}</p>
</div>
""", unsafe_allow_html=True)
    else:
        frame = records_to_frame(view)
        widths = [2, 3, 2, 1, 2, 1, 1, 1]
        header = st.columns(widths)
        for col, label in zip(header, list(frame.columns) + ["", ""]):
            col.markdown(f"**{label}**")

        # Each table row is placed in a scrollable container once the table grows
        table = st.container(height=400) if len(view) > 5 else st.container()
        with table:
            for index, row in enumerate(frame.itertuples(index=False)):
                cols = st.columns(widths)
                for col, value in zip(cols, row):
                    col.write(value)
                cols[-2].button("Edit", key=f"row_edit_{view[index]['id']}", on_click=start_edit, args=(index,))
                cols[-1].button("Delete", key=f"row_delete_{view[index]['id']}", on_click=request_delete, args=(index,))

    render_export_buttons(view)


def render_export_buttons(view: list[dict]):
    export_config = st.session_state.config["export"]
    filenames = {
        "csv": export_config.get("csv_filename"),
        "json": export_config.get("json_filename"),
        "xlsx": export_config.get("xlsx_filename"),
    }
    labels = {"csv": "📥 Export CSV", "json": "📥 Export JSON", "xlsx": "📥 Export Excel"}

    cols = st.columns(len(labels))
    for col, (fmt, label) in zip(cols, labels.items()):
        with col:
            try:
                export = export_records(view, fmt, export_config["date_format"], filenames)
            except EmptyExportError:
                st.button(label, key=f"export_{fmt}", on_click=report_empty_export, use_container_width=True)
                continue
            st.download_button(
                label,
                data=export.data,
                file_name=export.filename,
                mime=export.mime,
                key=f"export_{fmt}",
                use_container_width=True
            )


def main():
    """Main application entry point."""
    init_session_state()

    st.title("🎓 Student Registration System")

    render_sidebar()
    render_messages()

    col1, col2 = st.columns([1, 2])

    with col1:
        render_registration_form()

    with col2:
        render_edit_form()
        render_table()


if __name__ == "__main__":
    main()
