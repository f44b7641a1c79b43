from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional

import altair as alt
import pandas as pd

from core.normalize import ChartRecord, NUMERIC_FIELDS, records_payload

alt.data_transformers.disable_max_rows()

CHART_TYPES = ("line", "bar")


@dataclass(frozen=True)
class Series:
    key: str
    label: str
    color: str


SERIES: List[Series] = [
    Series("orderSum", "Сумма заказа", "#3b82f6"),
    Series("volume", "Объём", "#10b981"),
    Series("sales", "Продажи", "#8b5cf6"),
]


def default_visibility() -> Dict[str, bool]:
    return {s.key: True for s in SERIES}


def records_frame(records: Iterable[ChartRecord]) -> pd.DataFrame:
    return pd.DataFrame(records_payload(list(records)), columns=["date", *NUMERIC_FIELDS])


def compute_totals(records: Iterable[ChartRecord]) -> Dict[str, float]:
    frame = records_frame(records)
    return {key: float(frame[key].sum()) for key in NUMERIC_FIELDS}


def format_total(value: float) -> str:
    """Format a number the ru-RU way: 1 234 567,5 (at most 3 fraction digits)."""
    rounded = round(float(value), 3)
    if rounded == 0:
        rounded = 0.0
    text = f"{rounded:,.3f}".rstrip("0").rstrip(".")
    return text.replace(",", "\u00a0").replace(".", ",")


def build_chart(
    records: List[ChartRecord],
    chart_type: str = "line",
    visible: Optional[Mapping[str, bool]] = None,
) -> Optional[alt.Chart]:
    if chart_type not in CHART_TYPES:
        raise ValueError(f"Unknown chart type: {chart_type}")
    visible = default_visibility() if visible is None else visible
    shown = [s for s in SERIES if visible.get(s.key, False)]
    if not records or not shown:
        return None

    frame = records_frame(records)
    long_df = frame.melt(
        id_vars=["date"],
        value_vars=[s.key for s in shown],
        var_name="series",
        value_name="value",
    )
    long_df["label"] = long_df["series"].map({s.key: s.label for s in shown})

    x = alt.X("date:N", title=None, sort=None, axis=alt.Axis(labelAngle=-45, labelFontSize=12))
    y = alt.Y("value:Q", title=None, axis=alt.Axis(labelFontSize=12, gridDash=[3, 3]))
    color = alt.Color(
        "label:N",
        title=None,
        scale=alt.Scale(domain=[s.label for s in shown], range=[s.color for s in shown]),
        legend=alt.Legend(orient="bottom"),
    )
    tooltip = [
        alt.Tooltip("date:N", title="Дата"),
        alt.Tooltip("label:N", title="Показатель"),
        alt.Tooltip("value:Q", title="Значение", format=","),
    ]

    base = alt.Chart(long_df)
    if chart_type == "line":
        chart = base.mark_line(interpolate="monotone", strokeWidth=2, point=True).encode(
            x=x, y=y, color=color, tooltip=tooltip
        )
    else:
        chart = base.mark_bar().encode(x=x, y=y, color=color, xOffset="label:N", tooltip=tooltip)
    return chart.properties(height=400)

