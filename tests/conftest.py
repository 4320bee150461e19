import pytest


@pytest.fixture
def people_dataset():
    """
    Small dataset with one exact duplicate and one missing age.
    """
    return [
        ["Name", "Age", "City"],
        ["A", "30", "NY"],
        ["B", "", "LA"],
        ["A", "30", "NY"],
    ]


@pytest.fixture
def sales_dataset():
    """
    Monthly sales with a date, a numeric and a text column.
    """
    return [
        ["order_date", "revenue", "region"],
        ["2023-01-01", "100", "East"],
        ["2023-02-01", "250", "West"],
        ["2023-03-01", "300", "East"],
    ]


@pytest.fixture
def monthly_series():
    return [
        ("2023-01-01", "10"),
        ("2023-02-01", "20"),
        ("2023-03-01", "30"),
        ("2023-04-01", "40"),
        ("2023-05-01", "50"),
    ]
