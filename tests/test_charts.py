from __future__ import annotations

import pytest

from core.charts import SERIES, build_chart, compute_totals, default_visibility, format_total, records_frame
from core.normalize import ChartRecord


@pytest.fixture()
def records() -> list[ChartRecord]:
    return [
        ChartRecord(date="01.01.2024", order_sum=100, volume=10, sales=1),
        ChartRecord(date="02.01.2024", order_sum=250.5, volume=0, sales=3),
        ChartRecord(date="03.01.2024", order_sum=0, volume=5, sales=0),
    ]


def test_series_order_and_colors() -> None:
    assert [s.key for s in SERIES] == ["orderSum", "volume", "sales"]
    assert [s.color for s in SERIES] == ["#3b82f6", "#10b981", "#8b5cf6"]
    assert default_visibility() == {"orderSum": True, "volume": True, "sales": True}


def test_records_frame_uses_wire_columns(records: list[ChartRecord]) -> None:
    frame = records_frame(records)
    assert list(frame.columns) == ["date", "orderSum", "volume", "sales"]
    assert frame["date"].tolist() == ["01.01.2024", "02.01.2024", "03.01.2024"]


def test_records_frame_empty() -> None:
    frame = records_frame([])
    assert frame.empty
    assert list(frame.columns) == ["date", "orderSum", "volume", "sales"]


def test_compute_totals(records: list[ChartRecord]) -> None:
    assert compute_totals(records) == {"orderSum": pytest.approx(350.5), "volume": 15.0, "sales": 4.0}


def test_compute_totals_empty() -> None:
    assert compute_totals([]) == {"orderSum": 0.0, "volume": 0.0, "sales": 0.0}


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0"),
        (15, "15"),
        (1234567, "1\u00a0234\u00a0567"),
        (350.5, "350,5"),
        (1000.12345, "1\u00a0000,123"),
        (-2500, "-2\u00a0500"),
    ],
)
def test_format_total(value: float, expected: str) -> None:
    assert format_total(value) == expected


def test_line_chart_spec(records: list[ChartRecord]) -> None:
    spec = build_chart(records, "line").to_dict()
    assert spec["mark"]["type"] == "line"
    assert spec["mark"]["interpolate"] == "monotone"
    assert spec["encoding"]["x"]["field"] == "date"
    assert spec["encoding"]["x"]["sort"] is None
    assert spec["encoding"]["x"]["axis"]["labelAngle"] == -45
    assert spec["encoding"]["color"]["scale"]["range"] == ["#3b82f6", "#10b981", "#8b5cf6"]


def test_bar_chart_groups_series(records: list[ChartRecord]) -> None:
    spec = build_chart(records, "bar").to_dict()
    assert spec["mark"]["type"] == "bar"
    assert spec["encoding"]["xOffset"]["field"] == "label"


def test_hidden_series_are_not_drawn(records: list[ChartRecord]) -> None:
    chart = build_chart(records, "line", {"orderSum": False, "volume": True, "sales": False})
    assert chart.to_dict()["encoding"]["color"]["scale"]["domain"] == ["Объём"]
    assert set(chart.data["series"]) == {"volume"}
    assert len(chart.data) == len(records)


def test_no_chart_without_records_or_series(records: list[ChartRecord]) -> None:
    assert build_chart([], "line") is None
    assert build_chart(records, "bar", {"orderSum": False, "volume": False, "sales": False}) is None


def test_unknown_chart_type(records: list[ChartRecord]) -> None:
    with pytest.raises(ValueError):
        build_chart(records, "pie")
