import html
import logging
from typing import List, Tuple

import streamlit as st

from swot_engine.config import Settings, get_settings
from swot_engine.extractor import SUPPORTED_EXTENSIONS
from swot_engine.form_state import FormState
from swot_engine.render import (
    CategoryGroup,
    group,
    serialize,
    to_json,
    to_markdown,
    to_pdf_bytes,
)
from swot_engine.schemas import MODES
from swot_engine.swot_generator import AnalysisClient, count_warnings
from swot_engine.workflow import handle_upload, run_analysis


st.set_page_config(page_title="Ai SWOT Analysis", layout="wide")


@st.cache_resource(show_spinner=False)
def _settings() -> Settings:
    return get_settings()


@st.cache_resource(show_spinner=False)
def _analysis_client() -> AnalysisClient:
    return AnalysisClient(_settings())


settings = _settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Minimal CSS for 2×2 responsive grid cards
st.markdown(
    """
    <style>
      .swot-card {
        border-radius: 16px;
        padding: 16px 18px;
        margin-bottom: 16px;
        border: 1px solid rgba(0,0,0,0.07);
        box-shadow: 0 4px 14px rgba(0,0,0,0.06);
      }
      .swot-title {
        font-size: 1.2rem;
        font-weight: 800;
        margin-bottom: 10px;
        letter-spacing: 0.2px;
        display: flex;
        justify-content: space-between;
        align-items: center;
      }
      .swot-count {
        font-size: 0.7rem;
        font-weight: 800;
        text-transform: uppercase;
        letter-spacing: 0.1em;
        padding: 2px 8px;
        border-radius: 8px;
        background: rgba(255,255,255,0.6);
      }
      .swot-bullets {
        font-size: 0.98rem;
        line-height: 1.45;
        margin: 0;
        padding-left: 1.15rem;
      }
      .swot-summary {
        border-left: 6px solid #6366f1;
        padding: 14px 18px;
        margin-bottom: 16px;
        font-style: italic;
        font-weight: 600;
      }
      .theme-emerald { background: rgba(16, 185, 129, 0.14); }
      .theme-amber { background: rgba(245, 158, 11, 0.16); }
      .theme-blue { background: rgba(59, 130, 246, 0.14); }
      .theme-red { background: rgba(239, 68, 68, 0.14); }

      @media (max-width: 900px) {
        .swot-card { padding: 14px 14px; }
        .swot-title { font-size: 1.1rem; }
        .swot-bullets { font-size: 0.96rem; }
      }
    </style>
    """,
    unsafe_allow_html=True,
)

MODE_LABELS = {"individual": "Career Mode", "business": "Business Mode"}

FIELD_LABELS: dict = {
    "individual": [
        ("role", "Role"),
        ("seniority", "Seniority"),
        ("industry", "Industry"),
        ("market", "Market"),
        ("career_goal", "Career Goal"),
    ],
    "business": [
        ("company", "Company"),
        ("website", "Website"),
        ("product_service", "Product"),
        ("industry", "Industry"),
        ("market_region", "Market"),
        ("customer_segment", "Customers"),
        ("value_proposition", "Value Proposition"),
    ],
}

CONTENT_LABELS = {
    "individual": ("Strategic Input", "Deep analysis input...", "Upload CV"),
    "business": ("Strategic Data", "Paste data for deep segmentation...", "Upload Portfolio"),
}

# ----------------------------
# Session state initialization
# ----------------------------
if "form" not in st.session_state:
    st.session_state.form = FormState()
if "upload_nonce" not in st.session_state:
    st.session_state.upload_nonce = 0

state: FormState = st.session_state.form


def _widget_key(mode: str, field: str) -> str:
    return f"{mode}.{field}"


def _uploader_key(mode: str) -> str:
    return f"upload.{mode}.{st.session_state.upload_nonce}"


def _forget_widgets(mode: str, fields: List[str]) -> None:
    # Widgets re-read their value from FormState on the next render.
    for field in fields:
        st.session_state.pop(_widget_key(mode, field), None)


def _new_uploader() -> None:
    st.session_state.upload_nonce += 1


# ----------------------------
# Callbacks
# ----------------------------
def _on_mode_change() -> None:
    state.switch_mode(st.session_state.mode_choice)
    _new_uploader()


def _on_field_change(mode: str, field: str) -> None:
    state.set_field(mode, field, st.session_state[_widget_key(mode, field)])


def _on_upload(mode: str, key: str) -> None:
    uploaded = st.session_state.get(key)
    if uploaded is None:
        state.remove_file()
    else:
        handle_upload(state, uploaded.name, uploaded.getvalue(), max_bytes=settings.max_upload_bytes)
    _forget_widgets(mode, ["content"])


def _on_remove_file(mode: str) -> None:
    state.remove_file()
    _forget_widgets(mode, ["content"])
    _new_uploader()


def _on_reset(mode: str) -> None:
    state.reset(mode)
    _forget_widgets(mode, [name for name, _ in FIELD_LABELS[mode]] + ["content"])
    _new_uploader()


# ----------------------------
# Rendering helpers
# ----------------------------
def render_card(g: CategoryGroup) -> None:
    bullets_html = "".join([f"<li>{html.escape(b)}</li>" for b in g.items])
    st.markdown(
        f"""
        <div class="swot-card theme-{g.color}">
          <div class="swot-title">{html.escape(g.title)}<span class="swot-count">{g.count} Points</span></div>
          <ul class="swot-bullets">{bullets_html}</ul>
        </div>
        """,
        unsafe_allow_html=True,
    )


def _pairs(items: List[Tuple[str, str]]) -> List[List[Tuple[str, str]]]:
    return [items[i : i + 2] for i in range(0, len(items), 2)]


# -------------
# Header
# -------------
st.title("Ai SWOT Analysis")
st.write("Strategic depth for career and corporate intelligence.")

st.radio(
    "Mode",
    options=list(MODES),
    index=list(MODES).index(state.mode),
    format_func=lambda m: MODE_LABELS[m],
    horizontal=True,
    key="mode_choice",
    on_change=_on_mode_change,
    label_visibility="collapsed",
)

mode = state.mode
profile = state.active_profile
content_label, content_placeholder, upload_label = CONTENT_LABELS[mode]

left, right = st.columns([5, 7])

# -------------
# Input form
# -------------
with left:
    for row in _pairs(FIELD_LABELS[mode]):
        cols = st.columns(len(row))
        for col, (field, label) in zip(cols, row):
            with col:
                st.text_input(
                    label,
                    value=getattr(profile, field),
                    placeholder=f"Enter {label}",
                    key=_widget_key(mode, field),
                    on_change=_on_field_change,
                    args=(mode, field),
                )

    uploader_key = _uploader_key(mode)
    if state.upload.filename:
        f1, f2 = st.columns([4, 1])
        with f1:
            status = "Parsing…" if state.parsing else "Loaded"
            st.caption(f"📄 {state.upload.filename} ({status})")
        with f2:
            st.button("Remove", key="remove_file", on_click=_on_remove_file, args=(mode,))
    st.file_uploader(
        f"{upload_label} (PDF/Word)",
        type=list(SUPPORTED_EXTENSIONS),
        key=uploader_key,
        on_change=_on_upload,
        args=(mode, uploader_key),
    )

    st.text_area(
        content_label,
        value=profile.content,
        placeholder=content_placeholder,
        height=160,
        key=_widget_key(mode, "content"),
        on_change=_on_field_change,
        args=(mode, "content"),
    )

    b1, b2 = st.columns([4, 1])
    with b1:
        analyze = st.button(
            "Run your Ai SWOT Analysis",
            type="primary",
            use_container_width=True,
            disabled=not state.can_analyze,
        )
    with b2:
        st.button("Clear", use_container_width=True, on_click=_on_reset, args=(mode,))

    if analyze:
        with st.spinner("Performing Strategic Evaluation... Generating 6-7 points per category"):
            run_analysis(state, _analysis_client())

    # ----------------------------
    # Display errors
    # ----------------------------
    if state.error:
        st.error(state.error)

# ----------------------------
# Render SWOT grid if available
# ----------------------------
with right:
    result = state.result
    if result is None:
        st.info(
            "**Advanced SWOT Ready**\n\n"
            "Fill in the context and provide data to receive a high-depth 6-7 point analysis."
        )
    else:
        st.subheader("Strategic Intelligence")
        st.markdown(f'<div class="swot-summary">{html.escape(result.summary)}</div>', unsafe_allow_html=True)

        groups = group(result)
        for pair in (groups[:2], groups[2:]):
            c1, c2 = st.columns(2)
            for col, g in zip((c1, c2), pair):
                with col:
                    render_card(g)

        # ----------------------------
        # Copy / download
        # ----------------------------
        txt_data = serialize(result)
        with st.expander("Copy as text", expanded=False):
            st.code(txt_data, language="text")

        d1, d2, d3, d4 = st.columns(4)
        with d1:
            st.download_button(
                label="Download TXT",
                data=txt_data,
                file_name="swot.txt",
                mime="text/plain",
                use_container_width=True,
            )
        with d2:
            st.download_button(
                label="Download Markdown",
                data=to_markdown(result),
                file_name="swot.md",
                mime="text/markdown",
                use_container_width=True,
            )
        with d3:
            st.download_button(
                label="Download JSON",
                data=to_json(result),
                file_name="swot.json",
                mime="application/json",
                use_container_width=True,
            )
        with d4:
            st.download_button(
                label="Download PDF",
                data=to_pdf_bytes(result),
                file_name="swot.pdf",
                mime="application/pdf",
                use_container_width=True,
            )

        warnings = count_warnings(result)
        if warnings:
            with st.expander("Validation warnings", expanded=False):
                for w in warnings:
                    st.write(f"- {w}")

st.caption("Powered by Kepler Ai")
