import base64
import html
from contextlib import contextmanager
from typing import Optional

import streamlit as st

from core import controller
from core.charts import SERIES, build_chart, compute_totals, format_total, records_frame
from core.state import ARTIFACT_FILE_NAME, DashboardState, PromptArtifact


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.1rem;color: #111827;margin-bottom: 8px;}
        .total-tile {padding: 16px;border-radius: 8px;border: 1px solid;}
        .total-tile .label {font-size: 0.85rem;color: #4b5563;margin-bottom: 4px;}
        .total-tile .value {font-size: 1.5rem;font-weight: 700;}
        .inline-error {padding: 12px 16px;background: #fee2e2;border: 1px solid #f87171;color: #b91c1c;border-radius: 8px;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: Optional[str] = None):
    container = st.container()
    container.markdown(
        f"""
        <div class="card">
          <div class="card-title">{title or ""}</div>
        """,
        unsafe_allow_html=True,
    )
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def get_state() -> DashboardState:
    if "dashboard" not in st.session_state:
        st.session_state["dashboard"] = DashboardState()
    return st.session_state["dashboard"]


def render_error(message: str):
    st.markdown(
        f"<div class='inline-error'><b>Ошибка:</b><br>{html.escape(message)}</div>",
        unsafe_allow_html=True,
    )


def render_artifact(artifact: PromptArtifact):
    if artifact.kind == "image":
        st.image(artifact.content, caption="Ответ")
    elif artifact.kind == "pdf":
        encoded = base64.b64encode(artifact.content).decode("ascii")
        st.markdown(
            f"<embed src='data:application/pdf;base64,{encoded}' type='application/pdf' "
            "style='width:100%;min-height:400px;border-radius:8px;border:1px solid #e5e7eb;'>",
            unsafe_allow_html=True,
        )
    else:
        st.download_button(
            "Скачать файл",
            data=artifact.content,
            file_name=ARTIFACT_FILE_NAME,
            mime=artifact.content_type or None,
        )


# ---------- Page sections ----------
def render_prompt_section(state: DashboardState):
    with card("Что вы хотите увидеть?"):
        prompt = st.text_area("Запрос", placeholder="Введите пожелание...", height=90, label_visibility="collapsed")
        send = st.button(
            "Отправить",
            disabled=state.prompt_loading or not prompt.strip(),
            key="send_prompt",
        )
        if send:
            with st.spinner("Ожидание ответа... Файл загружается"):
                controller.send_prompt(state, prompt)
        if state.prompt_error:
            st.error(state.prompt_error)
        if state.artifact is not None:
            render_artifact(state.artifact)


def render_totals(state: DashboardState):
    totals = compute_totals(state.records)
    cols = st.columns(len(SERIES))
    for col, series in zip(cols, SERIES):
        col.markdown(
            f"<div class='total-tile' style='border-color:{series.color};'>"
            f"<div class='label'>{series.label}</div>"
            f"<div class='value' style='color:{series.color};'>{format_total(totals[series.key])}</div>"
            "</div>",
            unsafe_allow_html=True,
        )


def render_chart_section(state: DashboardState):
    controls = st.columns([1, 2, 3])
    if controls[0].button("Обновить", disabled=state.loading, key="refresh"):
        with st.spinner("Загрузка..."):
            controller.load_chart_data(state)
        st.rerun()
    chart_labels = {"line": "Линейный график", "bar": "Столбчатая диаграмма"}
    choice = controls[1].radio(
        "Тип графика",
        options=list(chart_labels),
        format_func=chart_labels.get,
        index=list(chart_labels).index(state.chart_type),
        horizontal=True,
        label_visibility="collapsed",
    )
    controller.set_chart_type(state, choice)

    render_totals(state)

    toggle_cols = st.columns(len(SERIES))
    for col, series in zip(toggle_cols, SERIES):
        checked = col.checkbox(series.label, value=state.visible.get(series.key, True), key=f"show_{series.key}")
        if checked != state.visible.get(series.key, True):
            controller.toggle_series(state, series.key)

    with card():
        chart = build_chart(state.records, state.chart_type, state.visible)
        if chart is None:
            st.info("Нет выбранных показателей.")
        else:
            st.altair_chart(chart, use_container_width=True)

    frame = records_frame(state.records)
    with st.expander("Таблица данных", expanded=False):
        st.dataframe(frame, hide_index=True, use_container_width=True)
    st.download_button(
        "Скачать CSV",
        data=frame.to_csv(index=False).encode("utf-8"),
        file_name="chart_data.csv",
        mime="text/csv",
    )


# ---------- UI setup ----------
st.set_page_config(page_title="Данные по сборке и продаже", layout="wide")
inject_base_styles()
st.title("Данные по сборке и продаже.")

state = get_state()
render_prompt_section(state)

if st.button("Загрузить данные", disabled=state.loading, type="primary", key="load_data"):
    with st.spinner("Загрузка..."):
        controller.load_chart_data(state)

if state.error:
    render_error(state.error)

if state.records:
    render_chart_section(state)
