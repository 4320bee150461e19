import pytest

from sheetiq.core.cleaner import clean_dataset, standardize_date_formats
from sheetiq.core.errors import InsufficientDataError, InvalidStrategyError
from sheetiq.core.imputer import ImputationPlan
from sheetiq.core.profiler import DataProfiler
from sheetiq.core.schema import ColumnType


def test_clean_end_to_end(people_dataset):
    result = clean_dataset(people_dataset)
    summary = result["summary"]

    assert result["dataset"] == [
        ["Name", "Age", "City"],
        ["A", "30", "NY"],
        ["B", "30", "LA"],
    ]
    assert summary["duplicate_rows_removed"] == 1
    assert summary["values_filled"] == 1
    assert summary["formats_standardized"] == 0
    assert summary["quality_before"] == 89
    assert summary["quality_after"] == 100
    assert summary["rows_original"] == 3
    assert summary["rows_after_cleaning"] == 2
    assert summary["column_types"] == {"Name": "text", "Age": "numeric", "City": "text"}


def test_clean_does_not_touch_input(people_dataset):
    snapshot = [list(r) for r in people_dataset]
    clean_dataset(people_dataset)
    assert people_dataset == snapshot


def test_clean_with_plan():
    data = [["region", "units"], ["East", "1"], ["", "3"], ["East", ""], ["West", "3"]]
    result = clean_dataset(data, plan=ImputationPlan(numeric="mode", text="mode"))

    assert result["dataset"][2] == ["East", "3"]
    assert result["dataset"][3] == ["East", "3"]


def test_clean_errors():
    with pytest.raises(InsufficientDataError):
        clean_dataset([["a"]])

    with pytest.raises(InvalidStrategyError):
        clean_dataset([["a"], ["1"]], plan=ImputationPlan.from_dict({"text": "zero"}))


def test_clean_standardizes_dates():
    data = [
        ["order_date", "units"],
        ["01/15/2023", "5"],
        ["2023-01-16", "6"],
        ["2023/01/17", "7"],
        ["Jan 18, 2023", "8"],
    ]

    result = clean_dataset(data)

    assert [row[0] for row in result["dataset"][1:]] == [
        "2023-01-15",
        "2023-01-16",
        "2023-01-17",
        "2023-01-18",
    ]
    assert result["summary"]["formats_standardized"] == 3


def test_standardize_keeps_years_times_and_text():
    data = [
        ["year", "stamp"],
        ["2021", "2023-03-01T08:30:00"],
        ["2022", "soon"],
        ["2023", "12.03.2023"],
    ]
    types = {0: ColumnType.TEMPORAL, 1: ColumnType.TEMPORAL}

    assert standardize_date_formats(data, types) == 1
    assert data[1] == ["2021", "2023-03-01T08:30:00"]
    assert data[2] == ["2022", "soon"]
    assert data[3] == ["2023", "2023-03-12"]


# -------------------------------------------------
# Profiler
# -------------------------------------------------
def test_profile_first_numeric_column(sales_dataset):
    profile = DataProfiler().profile(sales_dataset)

    assert profile["total_records"] == 3
    assert profile["column"] == "revenue"
    stats = profile["statistics"]
    assert stats["mean"] == pytest.approx(650 / 3)
    assert stats["median"] == 250
    assert stats["variance"] == pytest.approx(7222.2222, rel=1e-4)


def test_profile_without_numeric_column():
    profile = DataProfiler().profile([["name"], ["a"], ["b"]])

    assert "statistics" not in profile
    assert profile["column_types"] == {"name": "text"}
