"""
Resume Form AI – Streamlit registration form.
Fill manually or upload a résumé; fields populate while the model response streams.
No business logic in layout; extraction and merging live in resume_pipeline.
"""

import asyncio
from typing import List, Optional

import streamlit as st

from resume_form_ai.config import LANGUAGE_OPTIONS, QUALIFICATION_OPTIONS
from resume_form_ai.resume_pipeline.form_controller import FillMode, ResumeFormController
from resume_form_ai.schemas.form_record import EMPLOYMENT_STATUS_VALUES, FormRecord

TEXT_FIELDS = [
    ("firstName", "First Name", "e.g., Jane"),
    ("lastName", "Last Name", "e.g., Doe"),
    ("middleName", "Middle Name (Optional)", "e.g., Marie"),
    ("email", "Email Address", "e.g., jane.doe@example.com"),
    ("phone", "Phone Number", "e.g., +1 234 567 890"),
    ("dateOfBirth", "Date of Birth", "YYYY-MM-DD"),
]


def _get_controller() -> ResumeFormController:
    if "controller" not in st.session_state:
        st.session_state["controller"] = ResumeFormController()
    return st.session_state["controller"]


def _widget_key(controller: ResumeFormController, field: str) -> str:
    """Widget keys change per attempt so fresh extraction results re-seed the inputs."""
    return f"{field}_{controller.attempt_id}"


def _options_with(options: List[str], current: str) -> List[str]:
    """Select options, keeping an extracted value that is not in the predefined list."""
    if current and current not in options:
        return options + [current]
    return options


def _run_upload(controller: ResumeFormController, uploaded_file, preview) -> None:
    """Run one upload attempt, rendering the partial record after every merge."""

    def show_progress(record: FormRecord) -> None:
        preview.json(record.model_dump(by_alias=True, exclude_defaults=True))

    controller.on_change = show_progress
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        loop.run_until_complete(controller.handle_upload(uploaded_file, uploaded_file.type))
    finally:
        controller.on_change = None
        loop.close()


def _on_mode_change() -> None:
    controller = _get_controller()
    controller.set_mode(FillMode(st.session_state["fill_mode"]))
    st.session_state.pop("last_file_id", None)


def _on_skill_entered(key: str) -> None:
    controller = _get_controller()
    controller.add_skills(st.session_state.get(key, ""))
    st.session_state[key] = ""


def _sync_field(controller: ResumeFormController, field: str, value: Optional[str]) -> None:
    """Write a widget value back to the form record if the user changed it."""
    value = value or ""
    if controller.record.model_dump(by_alias=True)[field] != value:
        controller.set_field(field, value)


def render_upload_section(controller: ResumeFormController) -> None:
    if st.session_state.pop("force_manual", False):
        st.session_state["fill_mode"] = FillMode.MANUAL.value
        st.session_state.pop("last_file_id", None)
    st.radio(
        "How would you like to fill the form?",
        options=[FillMode.MANUAL.value, FillMode.RESUME.value],
        format_func=lambda m: "Fill Manually" if m == FillMode.MANUAL.value else "Fill by Resume",
        horizontal=True,
        key="fill_mode",
        on_change=_on_mode_change,
    )
    if st.session_state.get("fill_mode") != FillMode.RESUME.value:
        return

    uploaded = st.file_uploader(
        "Upload your resume",
        type=["pdf", "docx", "txt"],
        key="resume_upload",
        help="PDF, DOCX or TXT. The form will populate as data is extracted.",
    )
    if uploaded is None or uploaded.file_id == st.session_state.get("last_file_id"):
        return

    st.session_state["last_file_id"] = uploaded.file_id
    preview = st.empty()
    with st.spinner("Parsing your resume… Form will populate as data is extracted."):
        _run_upload(controller, uploaded, preview)
    preview.empty()
    if controller.fill_mode is FillMode.MANUAL:
        # Error reverts to manual entry; the radio can only be reset before it renders
        st.session_state["force_manual"] = True
        st.rerun()


def render_form(controller: ResumeFormController) -> None:
    record = controller.record.model_dump(by_alias=True)

    col1, col2 = st.columns(2)
    for i, (field, label, placeholder) in enumerate(TEXT_FIELDS):
        target = (col1, col2)[i % 2] if i < 2 else st
        value = target.text_input(
            label,
            value=record[field],
            placeholder=placeholder,
            key=_widget_key(controller, field),
        )
        _sync_field(controller, field, value)

    qcol, ycol = st.columns(2)
    qualification_options = _options_with(QUALIFICATION_OPTIONS, record["qualification"])
    qualification = qcol.selectbox(
        "Highest Qualification",
        options=qualification_options,
        index=qualification_options.index(record["qualification"]) if record["qualification"] else None,
        placeholder="Select Qualification",
        key=_widget_key(controller, "qualification"),
    )
    _sync_field(controller, "qualification", qualification)
    years = ycol.text_input(
        "Years of Experience",
        value=record["yearsOfExperience"],
        placeholder="e.g., 5",
        key=_widget_key(controller, "yearsOfExperience"),
    )
    _sync_field(controller, "yearsOfExperience", years)

    status = st.radio(
        "Current Employment Status",
        options=list(EMPLOYMENT_STATUS_VALUES),
        index=EMPLOYMENT_STATUS_VALUES.index(record["employmentStatus"]) if record["employmentStatus"] else None,
        horizontal=True,
        key=_widget_key(controller, "employmentStatus"),
    )
    _sync_field(controller, "employmentStatus", status)

    certifications = st.text_input(
        "Certifications (comma-separated)",
        value=record["certifications"],
        placeholder="e.g., AWS Certified Developer, PMP",
        key=_widget_key(controller, "certifications"),
    )
    _sync_field(controller, "certifications", certifications)

    st.markdown("**Skills & Expertise**")
    if controller.record.skills:
        pill_cols = st.columns(min(len(controller.record.skills), 6))
        for i, skill in enumerate(controller.record.skills):
            if pill_cols[i % len(pill_cols)].button(f"{skill} ✕", key=f"skill_{controller.attempt_id}_{i}"):
                controller.remove_skill(skill)
                st.rerun()
    skill_key = f"skill_input_{controller.attempt_id}"
    st.text_input(
        "Add a skill and press Enter",
        key=skill_key,
        on_change=_on_skill_entered,
        args=(skill_key,),
    )

    language_options = _options_with(LANGUAGE_OPTIONS, record["languages"])
    language = st.selectbox(
        "Primary Language",
        options=language_options,
        index=language_options.index(record["languages"]) if record["languages"] else None,
        placeholder="Select Language",
        key=_widget_key(controller, "languages"),
    )
    _sync_field(controller, "languages", language)

    if st.button("Next", type="primary", key="next_btn"):
        st.success("Registration details captured.")
        st.json(controller.record.model_dump(by_alias=True))


def render_layout() -> None:
    """Streamlit page layout; state and extraction live in the controller."""
    st.set_page_config(page_title="Registration Form", layout="centered")
    st.title("Registration Form")
    st.markdown("*Fill in your details below or upload a resume to get started.*")
    st.divider()

    controller = _get_controller()
    render_upload_section(controller)

    if controller.error:
        st.error(controller.error)

    st.divider()
    render_form(controller)


if __name__ == "__main__":
    render_layout()
