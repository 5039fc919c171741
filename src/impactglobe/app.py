"""ImpactGlobe — Streamlit app: near-Earth asteroids on a globe and a chosen impact."""

import datetime
import logging
import time

import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from impactglobe import geodesy  # noqa: E402
from impactglobe.catalog import fetch_catalog  # noqa: E402
from impactglobe.consequence import consequence_of  # noqa: E402
from impactglobe.i18n import t  # noqa: E402
from impactglobe.mitigation import fallback_advice, generate_mitigation_advice  # noqa: E402
from impactglobe.models import AsteroidRecord, EntityKind  # noqa: E402
from impactglobe.orbit import OrbitField  # noqa: E402
from impactglobe.renderers.globe_3d import render_globe  # noqa: E402
from impactglobe.renderers.impact_map import render_impact_map  # noqa: E402
from impactglobe.selection import ImpactSelector, SelectionState  # noqa: E402

logging.basicConfig(level=logging.INFO)

# --- Language detection (browser-first via streamlit-js-eval) ---
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "es" if _browser_lang.lower().startswith("es") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="☄",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# --- Session state initialization ---

if "current_date" not in st.session_state:
    st.session_state.current_date = datetime.date.today()
if "orbit_field" not in st.session_state:
    st.session_state.orbit_field = OrbitField()
if "orbit_started" not in st.session_state:
    st.session_state.orbit_started = time.monotonic()
if "selector" not in st.session_state:
    st.session_state.selector = ImpactSelector()
if "impact_event" not in st.session_state:
    st.session_state.impact_event = None
if "mitigation" not in st.session_state:
    st.session_state.mitigation = None

st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #000000 !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    .instruction-banner {
        background-color: rgba(0, 0, 0, 0.85);
        color: white;
        padding: 0.8rem 1.6rem;
        border-radius: 10px;
        font-weight: 600;
        text-align: center;
    }
    </style>
    """,
    unsafe_allow_html=True,
)


@st.cache_data(ttl=300, show_spinner=False)
def _load_catalog(date: str) -> tuple[AsteroidRecord, ...]:
    return fetch_catalog(date)


field: OrbitField = st.session_state.orbit_field
selector: ImpactSelector = st.session_state.selector

# --- Report view (replaces the globe after a confirmed impact) ---
if st.session_state.impact_event is not None:
    event = st.session_state.impact_event
    consequence = consequence_of(event)

    st.markdown(f"## {t('report_title', _lang)} — {event.asteroid.name}")
    st.caption(f"lat {event.lat:.4f}, lon {event.lon:.4f}")
    c1, c2, c3, c4, c5 = st.columns(5)
    c1.metric(t("crater_diameter", _lang), f"{consequence.crater_diameter_m:.1f} m")
    c2.metric(t("crater_depth", _lang), f"{consequence.crater_depth_m:.0f} m")
    c3.metric(t("seismic", _lang), f"{consequence.seismic_magnitude:.1f}")
    c4.metric(t("energy", _lang), f"{consequence.energy_megatons:.1f}")
    c5.metric(
        t("devastation", _lang), f"{consequence.devastation_radius_m * 2 / 1000:.2f} km"
    )

    st.plotly_chart(render_impact_map(event, consequence), use_container_width=True)

    st.markdown(f"### {t('mitigation', _lang)}")
    if st.session_state.mitigation is None:
        with st.spinner(t("loading_mitigation", _lang)):
            try:
                st.session_state.mitigation = generate_mitigation_advice(
                    event, consequence, lang=_lang
                )
            except Exception:
                st.session_state.mitigation = fallback_advice(
                    event, consequence, lang=_lang
                )
    st.text(st.session_state.mitigation)

    if st.button(t("btn_back", _lang), key="back_btn"):
        st.session_state.impact_event = None
        st.session_state.mitigation = None
        selector.reset()
        st.rerun()
    st.stop()

# --- Date controls ---
dcol1, dcol2, dcol3, dcol4 = st.columns([1, 1, 2, 1])
with dcol1:
    if st.button(t("btn_prev_day", _lang), key="prev_day", use_container_width=True):
        st.session_state.current_date -= datetime.timedelta(days=1)
with dcol2:
    if st.button(t("btn_next_day", _lang), key="next_day", use_container_width=True):
        st.session_state.current_date += datetime.timedelta(days=1)
with dcol4:
    if st.button(t("btn_today", _lang), key="today", use_container_width=True):
        st.session_state.current_date = datetime.date.today()
with dcol3:
    picked = st.date_input(
        t("label_date", _lang),
        value=st.session_state.current_date,
        label_visibility="collapsed",
    )
    if picked != st.session_state.current_date:
        st.session_state.current_date = picked

date_str = st.session_state.current_date.strftime("%Y-%m-%d")

# --- Orbit pass: regenerate only when the date changes ---
if field.current is None or field.current.date != date_str:
    with st.spinner(t("loading_catalog", _lang).format(date=date_str)):
        records = _load_catalog(date_str)
    field.replace(date_str, records)
    st.session_state.orbit_started = time.monotonic()
    selector.reset()

orbit_pass = field.current
if orbit_pass is None:
    st.stop()

if not orbit_pass.paths:
    st.info(t("empty_catalog", _lang).format(date=date_str))

# --- Asteroid selection ---
asteroids = [e for e in orbit_pass.entities if e.kind is EntityKind.ASTEROID]
options = [None] + [e.id for e in asteroids]
names = {e.id: e.name for e in asteroids}
current_id = selector.selected.id if selector.selected is not None else None
choice = st.selectbox(
    t("label_asteroid", _lang),
    options,
    index=options.index(current_id) if current_id in options else 0,
    format_func=lambda i: names.get(i, t("label_none", _lang)),
)
if choice != current_id:
    selector.select(orbit_pass.entity(choice) if choice is not None else None)

elapsed = time.monotonic() - st.session_state.orbit_started
st.plotly_chart(
    render_globe(
        orbit_pass,
        elapsed_s=elapsed,
        selected_id=selector.selected.id if selector.selected is not None else None,
        markers=selector.markers,
    ),
    use_container_width=True,
)

# --- Targeting controls ---
if selector.state is SelectionState.TARGETING:
    st.markdown(
        f"<div class='instruction-banner'>{t('instruction_target', _lang)}</div>",
        unsafe_allow_html=True,
    )
    pcol1, pcol2, pcol3 = st.columns([2, 2, 1])
    with pcol1:
        lat = st.number_input(t("label_lat", _lang), -90.0, 90.0, 19.43, format="%.4f")
    with pcol2:
        lon = st.number_input(t("label_lon", _lang), -180.0, 180.0, -99.13, format="%.4f")
    with pcol3:
        st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
        if st.button(t("btn_pick", _lang), key="pick_btn"):
            selector.pick(geodesy.to_cartesian(lat, lon))
            st.rerun()

    bcol1, bcol2 = st.columns(2)
    with bcol1:
        if st.button(t("btn_cancel", _lang), key="cancel_btn", use_container_width=True):
            selector.cancel()
            st.rerun()
    with bcol2:
        if st.button(
            t("btn_confirm", _lang),
            key="confirm_btn",
            disabled=selector.candidate is None,
            use_container_width=True,
        ):
            impact = selector.confirm()
            if impact is not None:
                st.session_state.impact_event = impact
                st.rerun()
elif selector.selected is not None:
    if st.button(t("btn_crash", _lang), key="crash_btn", use_container_width=True):
        selector.begin_targeting()
        st.rerun()
