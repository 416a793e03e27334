#!/usr/bin/env python3
import asyncio
import json
from datetime import datetime, time
from typing import Optional

import streamlit as st

from patrol_report.composer import build_payload, ReportComposer
from patrol_report.config import Settings
from patrol_report.export import whatsapp_share_url
from patrol_report.llm_generation import LLMProvider, create_generator
from patrol_report.reminder import ReminderMonitor, ReminderStore
from patrol_report.report_data import LEAKING_PRODUCTS, RECEIPT_PRODUCTS, UNLOADING_STATUSES
from patrol_report.validation import STEP_TITLES, TOTAL_STEPS
from patrol_report.wizard import NavOutcome, WizardController


st.set_page_config(
    page_title="Safety Patrol Report",
    layout="centered",
    initial_sidebar_state="collapsed"
)


st.markdown("""
<style>
    .step-done {
        background-color: #4caf50;
        height: 6px;
        border-radius: 3px;
    }
    .step-todo {
        background-color: #ddd;
        height: 6px;
        border-radius: 3px;
    }
</style>
""", unsafe_allow_html=True)


class StreamlitNotifier:
    """Shows reminders as toasts in the open app"""

    def request_permission(self) -> bool:
        return True

    def notify(self, title: str, body: str) -> None:
        st.toast(f"**{title}**\n\n{body}")


def initialize_session_state():
    """Initialize session state variables"""
    if 'settings' not in st.session_state:
        st.session_state.settings = Settings.from_env()
    if 'wizard' not in st.session_state:
        st.session_state.wizard = WizardController()
    if 'generated_report' not in st.session_state:
        st.session_state.generated_report = None
    if 'monitor' not in st.session_state:
        settings = st.session_state.settings
        monitor = ReminderMonitor(ReminderStore(settings.state_file), StreamlitNotifier())
        monitor.start()
        st.session_state.monitor = monitor


# ----------------------------------------------------------
# Field helpers: widgets read from and write back to ReportData
# ----------------------------------------------------------
def text_field(data, attr: str, label: str, **kwargs):
    setattr(data, attr, st.text_input(label, value=getattr(data, attr), key=f"f_{attr}", **kwargs))


def toggle_field(data, attr: str, label: str, **kwargs):
    setattr(data, attr, st.toggle(label, value=getattr(data, attr), key=f"f_{attr}", **kwargs))


def _to_time(value: str) -> Optional[time]:
    try:
        return datetime.strptime(value, "%H:%M").time() if value else None
    except ValueError:
        return None


def time_value(label: str, current: str, key: str) -> str:
    picked = st.time_input(label, value=_to_time(current), key=key, step=60)
    return picked.strftime("%H:%M") if picked else ""


def time_field(data, attr: str, label: str):
    setattr(data, attr, time_value(label, getattr(data, attr), f"f_{attr}"))


def select_field(data, attr: str, label: str, options):
    choices = [""] + list(options)
    current = getattr(data, attr)
    setattr(data, attr, st.selectbox(
        label, choices,
        index=choices.index(current) if current in choices else 0,
        format_func=lambda v: v or "Select...",
        key=f"f_{attr}",
    ))


# ----------------------------------------------------------
# Steps
# ----------------------------------------------------------
def render_guard(data):
    text_field(data, "guard_name", "Guard Name *", placeholder="Enter name")
    col1, col2 = st.columns(2)
    with col1:
        time_field(data, "patrol_start_time", "Patrolling From *")
    with col2:
        time_field(data, "patrol_end_time", "Patrolling To *")


def render_engines_pumps(data):
    st.subheader("Fire Engines")
    cols = st.columns(len(data.engines))
    for col, engine in zip(cols, data.engines):
        with col:
            is_up = st.toggle(engine.name, value=engine.is_up, key=f"engine_{engine.id}")
            data.update_engine(engine.id, is_up)
    text_field(data, "fire_engine_remarks", "Fire Engine Remarks", placeholder="Optional remarks...")

    st.subheader("Hydrant & Jockey Pump")
    text_field(data, "hydrant_pressure", "Hydrant Pressure (kg/m²) *", placeholder="e.g., 7.5")
    text_field(data, "jockey_pump_runtime", "Jockey Pump Frequency (mins) *", placeholder="Runs every X mins")


def render_storage_leakage(data):
    st.subheader("Water Tanks")
    col1, col2 = st.columns(2)
    with col1:
        text_field(data, "tk13_level", "TK13 Level (meters) *")
    with col2:
        text_field(data, "tk29_level", "TK29 Level (meters) *")

    st.subheader("Leakage")
    toggle_field(data, "air_line_leak", "Air Line Leak?")
    if data.air_line_leak:
        text_field(data, "air_line_leak_location", "Location of Air Leak *")
    toggle_field(data, "hydrant_line_leak", "Hydrant Line Leak?")
    if data.hydrant_line_leak:
        text_field(data, "hydrant_line_leak_location", "Location of Hydrant Leak *")
    toggle_field(data, "product_line_leak", "Product Line Leak?")
    if data.product_line_leak:
        select_field(data, "leaking_product", "Leaking Product *", LEAKING_PRODUCTS)
        text_field(data, "product_line_leak_location", "Location of Product Leak *")


def render_power(data):
    toggle_field(data, "power_33kv_on", "33KV Power Line ON")
    if data.power_33kv_on:
        return
    toggle_field(data, "gas_gen_running", "Any Gas Generator Used?")
    if not data.gas_gen_running:
        return
    for gen in data.gas_generators:
        used = st.toggle(f"{gen.name} Used?", value=gen.used, key=f"gen_{gen.id}_used")
        data.update_gas_generator(gen.id, "used", used)
        if used:
            col1, col2 = st.columns(2)
            with col1:
                data.update_gas_generator(
                    gen.id, "start_time", time_value("Start Time *", gen.start_time, f"gen_{gen.id}_start"))
            with col2:
                data.update_gas_generator(
                    gen.id, "end_time", time_value("End Time *", gen.end_time, f"gen_{gen.id}_end"))
    toggle_field(data, "gas_gen_changeover", "Changeover Performed?")


def render_logistics(data):
    st.subheader("Product Receipt thru Pipeline")
    toggle_field(data, "product_receipt_active", "Receipt Going On")
    if data.product_receipt_active:
        select_field(data, "product_name", "Product Name *", RECEIPT_PRODUCTS)
        text_field(data, "product_receipt_tank", "Receiving Tank No *")

    st.subheader("Rake")
    toggle_field(data, "rake_placed", "Rake Placed?")
    if data.rake_placed:
        time_field(data, "rake_placement_time", "Placement Time *")
        choices = [""] + list(UNLOADING_STATUSES)
        status = st.selectbox(
            "Unloading Status *", choices,
            index=choices.index(data.rake_unloading_status),
            format_func=lambda v: v or "Select...",
            key="f_rake_unloading_status",
        )
        data.set_rake_unloading_status(status)
        removed = st.toggle("Rake Removed by Railways?", value=data.rake_removed,
                            disabled=data.rake_unloading_status != "Completed", key="f_rake_removed")
        data.set_rake_removed(removed)
        if data.rake_removed:
            time_field(data, "rake_removal_time", "Removal Time *")


def render_security(data):
    toggle_field(data, "office_ac_lighting_on", "Office AC & Lighting ON")
    toggle_field(data, "cbacs_running", "C BACS System OK")
    if not data.cbacs_running:
        text_field(data, "cbacs_remarks", "C BACS Remarks *")
    toggle_field(data, "all_cctv_running", "All 71 Cameras Running?")
    if not data.all_cctv_running:
        text_field(data, "cctv_down_count", "Count Down *")
        text_field(data, "cctv_down_remarks", "Camera Names / Remarks *")
    toggle_field(data, "watch_tower_used", "Watch Tower Used?")
    if data.watch_tower_used:
        text_field(data, "watch_tower_observation", "Watch Tower Observation *")
    toggle_field(data, "night_vision_used", "Night Vision Binocular Used?")
    if data.night_vision_used:
        text_field(data, "night_vision_observation", "Night Vision Observation *")


STEP_RENDERERS = {
    1: render_guard,
    2: render_engines_pumps,
    3: render_storage_leakage,
    4: render_power,
    5: render_logistics,
    6: render_security,
}


def display_progress(step: int):
    cols = st.columns(TOTAL_STEPS)
    for i, col in enumerate(cols, 1):
        with col:
            css = "step-done" if i <= step else "step-todo"
            st.markdown(f'<div class="{css}"></div>', unsafe_allow_html=True)
    st.caption(f"Step {step} of {TOTAL_STEPS}: {STEP_TITLES[step]}")


def display_jockey_warning(wizard: WizardController):
    st.warning(wizard.jockey_warning_message())
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Yes, checked", type="primary", key="jockey_confirm"):
            wizard.confirm_jockey_warning()
            st.rerun()
    with col2:
        if st.button("No", key="jockey_decline"):
            wizard.decline_jockey_warning()
            st.rerun()


def run_generation(wizard: WizardController):
    settings = st.session_state.settings
    generator = create_generator(LLMProvider(settings.provider), settings)
    wizard.composer = ReportComposer(generator, store=st.session_state.monitor.store)

    with st.spinner("Generating report..."):
        outcome = asyncio.run(wizard.generate())

    if outcome.ok:
        st.session_state.generated_report = outcome.text
        st.rerun()
    else:
        st.error(outcome.error)


def display_navigation(wizard: WizardController):
    can_next = wizard.can_advance()
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Back", disabled=wizard.is_first, use_container_width=True):
            wizard.prev()
            st.rerun()
    with col2:
        label = "Generate Report" if wizard.is_last else "Next"
        if st.button(label, type="primary", disabled=not can_next or wizard.is_generating,
                     use_container_width=True):
            outcome = wizard.next()
            if outcome == NavOutcome.GENERATE:
                run_generation(wizard)
            else:
                st.rerun()

    if not can_next:
        st.caption("Required: " + ", ".join(wizard.missing()))


def display_generated_report(wizard: WizardController):
    text = st.session_state.generated_report
    st.header("Report Ready")
    st.code(text, language=None)
    st.link_button("Share on WhatsApp", whatsapp_share_url(text), type="primary")

    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            label="Download Text",
            data=text,
            file_name=f"safety_report_{datetime.now():%Y%m%d_%H%M}.txt",
            mime="text/plain"
        )
    with col2:
        st.download_button(
            label="Download Data (JSON)",
            data=json.dumps(build_payload(wizard.data), indent=2),
            file_name=f"safety_report_{datetime.now():%Y%m%d_%H%M}.json",
            mime="application/json"
        )

    if st.button("Start New Report"):
        wizard.reset()
        st.session_state.generated_report = None
        st.rerun()


@st.fragment(run_every=60)
def reminder_check():
    st.session_state.monitor.check()


def main():
    """Main Streamlit application"""

    initialize_session_state()
    settings = st.session_state.settings
    wizard = st.session_state.wizard

    with st.sidebar:
        st.header("Settings")
        provider = st.selectbox(
            "Report Engine",
            ["gemini", "openai"],
            index=0 if settings.provider != "openai" else 1,
            help="AI service used to write the WhatsApp message"
        )
        settings.provider = provider
        api_key = st.text_input(
            f"{provider.title()} API Key",
            type="password",
            help="Optional, uses the environment variable if not provided"
        )
        if api_key:
            if provider == "openai":
                settings.openai_api_key = api_key
            else:
                settings.gemini_api_key = api_key

    reminder_check()

    st.title("Safety Patrol Report")

    if st.session_state.generated_report:
        display_generated_report(wizard)
        return

    display_progress(wizard.step)

    if wizard.awaiting_jockey_confirmation:
        display_jockey_warning(wizard)
        return

    STEP_RENDERERS[wizard.step](wizard.data)

    st.markdown("---")
    display_navigation(wizard)


if __name__ == "__main__":
    main()
