"""
Registration Progress Tracker

Streamlit application for walking students through the 7-step registration
checklist, with staff sign-off at each stage and a printable certificate.

Usage:
    streamlit run app.py
"""

import streamlit as st

from regtracker.config import get_settings, setup_logging
from regtracker.errors import RegistrationValidationError, StorageDecodeError
from regtracker.schemas import STEP_CATALOG
from regtracker.viewer import (
    certificate_filename,
    escape_markdown,
    filter_students,
    flow_frame,
    get_certificate_css,
    get_step_css,
    render_certificate,
    render_certificate_document,
    render_step_card,
    students_to_frame,
)
from regtracker.workflow import (
    LocalStorage,
    StaffAccess,
    StepAvailability,
    StudentStore,
    current_step_index,
    is_complete,
    percent_complete,
    step_availability,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

SETTINGS = get_settings()
setup_logging(SETTINGS)

EXPORT_FILENAME = "registration-tracker-export.json"

st.set_page_config(
    page_title="Registration Progress Tracker",
    page_icon="📋",
    layout="wide",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "storage" not in st.session_state:
        st.session_state.storage = LocalStorage(SETTINGS.db_path)

    if "store" not in st.session_state:
        st.session_state.store = StudentStore(st.session_state.storage)

    if "staff" not in st.session_state:
        st.session_state.staff = StaffAccess(st.session_state.storage, SETTINGS.default_pin)

    if "current_student_id" not in st.session_state:
        students = st.session_state.store.students
        st.session_state.current_student_id = students[0].id if students else None


def select_student(student_id):
    st.session_state.current_student_id = student_id


# -----------------------------------------------------------------------------
# Header: Staff Mode
# -----------------------------------------------------------------------------

def render_header():
    """Render the title and the staff mode controls."""
    staff = st.session_state.staff

    col1, col2 = st.columns([3, 2])
    with col1:
        st.title("📋 Registration Progress Tracker")
        st.caption("7-step guided workflow with staff sign-off at each stage.")

    with col2:
        if staff.enabled:
            st.success("Staff Mode enabled")
            if st.button("Leave Staff Mode"):
                staff.lock()
                st.rerun()
        else:
            pin = st.text_input("Staff PIN", type="password", placeholder="Enter Staff PIN")
            if st.button("Unlock"):
                if staff.unlock(pin):
                    st.rerun()
                else:
                    st.error("Incorrect PIN")


# -----------------------------------------------------------------------------
# Students Tab
# -----------------------------------------------------------------------------

def render_students_tab():
    """Add, search, select and delete students."""
    store = st.session_state.store

    st.subheader("Add / Select Student")
    with st.form("add_student", clear_on_submit=True):
        col1, col2 = st.columns([3, 1])
        with col1:
            name = st.text_input("Student Name", placeholder="e.g., Jordan Smith")
        with col2:
            grade = st.text_input("Grade", placeholder="e.g., 9")
        if st.form_submit_button("Add Student"):
            try:
                student = store.add_student(name, grade)
            except RegistrationValidationError as e:
                st.error(str(e))
            else:
                select_student(student.id)
                st.success(f"Created student profile for {escape_markdown(student.name)}")

    query = st.text_input("Search students", placeholder="Name or grade")
    students = filter_students(store.students, query)

    st.subheader("Student List")
    if not students:
        st.info("No students yet. Add one above.")
        return

    for student in students:
        col1, col2, col3, col4, col5 = st.columns([4, 1, 2, 2, 1])
        with col1:
            is_current = student.id == st.session_state.current_student_id
            name = escape_markdown(student.name)
            label = f"**{name}**" if is_current else name
            if st.button(label, key=f"select_{student.id}", use_container_width=True):
                select_student(student.id)
                st.rerun()
        with col2:
            st.write(student.grade or "—")
        with col3:
            st.write(f"{percent_complete(student)}%")
        with col4:
            st.write(f"Step {current_step_index(student)}")
        with col5:
            if st.button("🗑", key=f"delete_{student.id}"):
                store.delete_student(student.id)
                if st.session_state.current_student_id == student.id:
                    remaining = store.students
                    select_student(remaining[0].id if remaining else None)
                st.rerun()


# -----------------------------------------------------------------------------
# Workflow Tab
# -----------------------------------------------------------------------------

def render_workflow_tab():
    """Render the current student's checklist and certificate."""
    store = st.session_state.store
    student = store.get(st.session_state.current_student_id)
    if not student:
        st.info("Add or choose a student from the Students tab.")
        return

    pct = percent_complete(student)
    st.subheader(escape_markdown(student.display_name))
    st.progress(pct / 100, text=f"{pct}% Complete")
    st.caption("Follow the steps below. Each one requires staff initials to unlock the next.")

    st.markdown(get_step_css(), unsafe_allow_html=True)
    cols = st.columns(3)
    for i, step in enumerate(student.steps):
        availability = step_availability(student.steps, step.index)
        with cols[i % 3]:
            st.markdown(render_step_card(step, availability), unsafe_allow_html=True)
            if availability == StepAvailability.AVAILABLE:
                render_sign_form(student.id, step.index)

    st.markdown(get_certificate_css(), unsafe_allow_html=True)
    st.markdown(render_certificate(student), unsafe_allow_html=True)

    col1, col2 = st.columns([1, 1])
    with col1:
        st.download_button(
            "Print Completion" if is_complete(student) else "Print Current Status",
            data=render_certificate_document(student),
            file_name=certificate_filename(student),
            mime="text/html",
            type="primary" if is_complete(student) else "secondary",
        )
    with col2:
        if st.button("Reset This Student"):
            store.reset_student(student.id)
            st.rerun()


def render_sign_form(student_id: str, index: int):
    """Sign-off form for an available step; hidden outside Staff Mode."""
    if not st.session_state.staff.enabled:
        st.caption("Enable Staff Mode to sign steps.")
        return

    with st.form(f"sign_{student_id}_{index}", clear_on_submit=True):
        initials = st.text_input("Staff Initials", placeholder="e.g., ML", max_chars=5)
        note = st.text_area("Notes (optional)", placeholder="Any quick notes…")
        if st.form_submit_button("Sign & Unlock Next"):
            try:
                st.session_state.store.sign_step(student_id, index, initials, note)
            except RegistrationValidationError as e:
                st.error(str(e))
            else:
                st.rerun()


# -----------------------------------------------------------------------------
# Admin Tab
# -----------------------------------------------------------------------------

def render_admin_tab():
    """PIN management, flow overview and bulk actions."""
    store = st.session_state.store
    staff = st.session_state.staff

    st.subheader("Staff PIN & Security")
    with st.form("update_pin", clear_on_submit=True):
        new_pin = st.text_input("Set / Update Staff PIN", type="password", placeholder="New PIN")
        if st.form_submit_button("Save PIN"):
            try:
                staff.update_pin(new_pin)
            except RegistrationValidationError as e:
                st.error(str(e))
            else:
                st.success("Staff PIN updated")

    st.subheader("Flow Overview")
    st.caption("How many students are at each step (includes current step for in-progress students).")
    flow = flow_frame(store.students)
    cols = st.columns(len(STEP_CATALOG))
    for col, definition in zip(cols, STEP_CATALOG):
        with col:
            st.metric(f"Step {definition.index}", int(flow.loc[definition.title, "students"]))
            st.caption(definition.title)
    st.bar_chart(flow["students"])

    st.subheader("Roster")
    st.dataframe(students_to_frame(store.students), hide_index=True, use_container_width=True)

    st.subheader("Bulk Actions")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.download_button(
            "Export JSON",
            data=store.export_json(),
            file_name=EXPORT_FILENAME,
            mime="application/json",
        )
    with col2:
        uploaded = st.file_uploader("Import JSON", type=["json"])
        if uploaded is not None and st.button("Import"):
            try:
                added = store.import_json(uploaded.getvalue().decode("utf-8"))
            except (StorageDecodeError, UnicodeDecodeError) as e:
                st.error(f"Import failed: {e}")
            else:
                st.success(f"Imported {added} students")
    with col3:
        confirm = st.checkbox("Confirm clearing all students from this device")
        if st.button("Clear Device Data", disabled=not confirm):
            store.clear()
            select_student(None)
            st.rerun()

    st.caption(
        "Data is stored on this device only. Multi-device syncing needs a backend "
        "in place of the local storage file."
    )


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_header()

    tab1, tab2, tab3 = st.tabs(["👥 Students", "🚀 Workflow", "🛡 Admin"])
    with tab1:
        render_students_tab()
    with tab2:
        render_workflow_tab()
    with tab3:
        render_admin_tab()


if __name__ == "__main__":
    main()
