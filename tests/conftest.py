import pandas as pd
import pytest


@pytest.fixture
def condo_raw():
    """Condo workbook as exported: has a Classification column, text parcel ids."""
    return pd.DataFrame(
        {
            "Parcel ID": ["C-001", "C-002", "C-003", "C-004", "C-005", "C-006", "C-007", "C-008"],
            "Price": [310000.0, 405000.0, 498000.0, 105000000.0, 260000.0, 330000.0, 415000.0, 25000.0],
            "Area": [900.0, 1200.0, 1500.0, 1400.0, 700.0, 950.0, 1250.0, 200.0],
            "Location": ["Downtown", "Downtown", "Downtown", "Downtown", "Harbor", "Harbor", "Harbor", "Harbor"],
            "Classification": [
                "Condominium", "Condominium", "Condominium", "Condominium",
                "Condominium", "Condominium", "Condominium", "Garage Only",
            ],
            "Year Built": [1998, 2005, 2012, 2010, 1985, 1990, 2001, 1970],
        }
    )


@pytest.fixture
def house_raw():
    """Single-family workbook: no Classification column, numeric parcel ids."""
    return pd.DataFrame(
        {
            "Parcel ID": [1001, 1002, 1003, 1004, 1005, 1006, 1007],
            "Price": [520000.0, 610000.0, 700000.0, 450000.0, 540000.0, 655000.0, 380000.0],
            "Area": [1800.0, 2100.0, 2500.0, 1600.0, 1950.0, 2400.0, 1500.0],
            "Location": ["Downtown", "Downtown", "Downtown", "Hillside", "Hillside", "Hillside", "Ridge"],
            "Actual Year Built": [1950, 1962, 1978, 1988, 1995, 2004, 1940],
        }
    )


@pytest.fixture
def raw_dir(tmp_path, condo_raw, house_raw):
    d = tmp_path / "raw"
    d.mkdir()
    condo_raw.to_excel(d / "condo_sales.xlsx", index=False)
    house_raw.to_excel(d / "single_family_sales.xlsx", index=False)
    return d


@pytest.fixture
def sales():
    """A combined, normalized sales table."""
    return pd.DataFrame(
        {
            "price": [200000.0, 250000.0, 300000.0, 410000.0, 395000.0, 520000.0, 610000.0, 150000.0],
            "area": [100.0, 150.0, 200.0, 1000.0, 1100.0, 1300.0, 1600.0, 800.0],
            "classification": ["Condominium"] * 3 + ["Single Family"] * 5,
            "location": ["Alpha", "Alpha", "Alpha", "Beta", "Beta", "Beta", "Beta", "Gamma"],
            "year_built": [2000, 2001, 2002, 1990, 1991, 1992, 1993, 1950],
        }
    )


@pytest.fixture
def rain_wide():
    return pd.DataFrame(
        {
            "date": pd.to_datetime(["2024-01-01", "2024-01-02", "2024-01-03"]),
            "north": [0.1, 0.0, 1.25],
            "central": [0.3, float("nan"), 0.75],
            "south": [0.0, 0.2, 0.4],
        }
    )
