from __future__ import annotations

from dashgen.schemas import ChartDataPoint, ChartSpec
from dashgen.services.analysis import EMPTY_DASHBOARD_REASON, build_dashboard
from dashgen.services.export import chart_export_name, chart_to_csv, filtered_export_name, rows_to_csv
from dashgen.services.summary import compute_summary


def test_summary_over_filtered_rows(region_rows, make_column):
    columns = [make_column("Region", "categorical"), make_column("Sales", "numerical")]
    filtered = region_rows[:1]
    summary = compute_summary(columns, region_rows, filtered, {"Region": ["East"]})

    assert (summary.total_rows, summary.filtered_rows) == (3, 1)
    assert (summary.column_count, summary.numerical_count) == (2, 1)
    assert (summary.value_column, summary.value_total, summary.value_average) == ("Sales", 100.0, 100.0)
    assert (summary.category_column, summary.unique_categories) == ("Region", 1)
    assert summary.is_filtered


def test_summary_without_typed_columns(make_column):
    summary = compute_summary([make_column("Notes", "unknown")], [], [])
    assert summary.value_column is None
    assert summary.value_average == 0.0
    assert summary.category_column is None
    assert not summary.is_filtered


def test_rows_to_csv():
    rows = [
        {"Region": "East", "Sales": 100.0, "Note": None},
        {"Region": "West", "Sales": 2.5, "Note": "Acme, Inc"},
    ]
    assert rows_to_csv(rows, ["Region", "Sales", "Note"]) == (
        'Region,Sales,Note\nEast,100,\nWest,2.5,"Acme, Inc"'
    )


def test_rows_to_csv_without_rows():
    assert rows_to_csv([], ["a", "b"]) == "a,b"


def test_chart_to_csv():
    points = [ChartDataPoint(label="East", value=130.0), ChartDataPoint(label="West", value=50.5)]
    assert chart_to_csv(points) == "Label,Value\nEast,130\nWest,50.5"


def test_chart_to_csv_quotes_labels():
    points = [ChartDataPoint(label="Acme, Inc", value=3.0), ChartDataPoint(label='The "Best" Co', value=1.0)]
    assert chart_to_csv(points) == 'Label,Value\n"Acme, Inc",3\n"The ""Best"" Co",1'


def test_export_names():
    assert filtered_export_name("sales.2023.xlsx") == "sales.2023_filtered.csv"
    assert chart_export_name("Sales by  Region") == "Sales_by_Region.csv"


def test_build_dashboard_assigns_palette_colors(region_rows, make_column):
    columns = [make_column("Region", "categorical"), make_column("Sales", "numerical")]
    specs = [
        ChartSpec(id=f"c{i}", type="bar", title="t", label_column="Region", value_column="Sales", aggregation="sum")
        for i in range(3)
    ]
    dashboard = build_dashboard("f.csv", region_rows, columns, specs, palette=["a", "b"])

    assert [chart.color for chart in dashboard.charts] == ["a", "b", "a"]
    assert dashboard.charts[0].data[0].label == "East"
    assert dashboard.empty_reason is None


def test_build_dashboard_reports_empty_state(region_rows, make_column):
    dashboard = build_dashboard("f.csv", region_rows, [make_column("Region", "categorical")], [], palette=["a"])
    assert dashboard.charts == []
    assert dashboard.empty_reason == EMPTY_DASHBOARD_REASON
