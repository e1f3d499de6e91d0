import pandas as pd
import pytest

from realty_eda.errors import ReshapeError
from realty_eda.transforms.reshape import long_to_wide, wide_to_long


def test_wide_to_long_row_count(rain_wide):
    long = wide_to_long(rain_wide)
    assert len(long) == len(rain_wide) * (rain_wide.shape[1] - 1)
    assert list(long.columns) == ["date", "gauge", "rainfall"]


def test_wide_to_long_order_and_values(rain_wide):
    long = wide_to_long(rain_wide)
    assert long["gauge"].tolist()[:3] == ["north", "central", "south"]
    assert (long["date"].iloc[:3] == rain_wide["date"].iloc[0]).all()
    for _, row in long.dropna().iterrows():
        expected = rain_wide.loc[rain_wide["date"] == row["date"], row["gauge"]].iloc[0]
        assert row["rainfall"] == expected


def test_wide_to_long_keeps_missing(rain_wide):
    long = wide_to_long(rain_wide)
    assert long["rainfall"].isna().sum() == 1


def test_round_trip(rain_wide):
    pd.testing.assert_frame_equal(long_to_wide(wide_to_long(rain_wide)), rain_wide)


def test_round_trip_preserves_unsorted_order(rain_wide):
    wide = rain_wide.iloc[::-1].reset_index(drop=True)[["date", "south", "north", "central"]]
    pd.testing.assert_frame_equal(long_to_wide(wide_to_long(wide)), wide)


def test_custom_column_names(rain_wide):
    long = wide_to_long(rain_wide, names_to="station", values_to="inches")
    assert set(long.columns) == {"date", "station", "inches"}
    back = long_to_wide(long, names_from="station", values_from="inches")
    pd.testing.assert_frame_equal(back, rain_wide)


def test_missing_id_column(rain_wide):
    with pytest.raises(ReshapeError):
        wide_to_long(rain_wide.drop(columns=["date"]))


def test_no_measurement_columns(rain_wide):
    with pytest.raises(ReshapeError, match="No measurement"):
        wide_to_long(rain_wide[["date"]])


def test_duplicate_columns(rain_wide):
    dup = pd.concat([rain_wide, rain_wide[["north"]]], axis=1)
    with pytest.raises(ReshapeError, match="Duplicate"):
        wide_to_long(dup)


def test_long_to_wide_rejects_duplicate_pairs(rain_wide):
    long = wide_to_long(rain_wide)
    with pytest.raises(ReshapeError, match="duplicate"):
        long_to_wide(pd.concat([long, long.iloc[[0]]], ignore_index=True))


def test_round_trip_restores_integer_columns(rain_wide):
    wide = rain_wide.drop(columns=["central"]).assign(tips=[1, 0, 3])
    long = wide_to_long(wide)
    assert long["rainfall"].dtype.kind == "f"
    back = long_to_wide(long)
    assert back["tips"].dtype == wide["tips"].dtype
    pd.testing.assert_frame_equal(back, wide)


def test_long_to_wide_explicit_dtypes(rain_wide):
    wide = rain_wide[["date", "north"]].assign(tips=[1, 0, 3])
    long = wide_to_long(wide)
    long.attrs = {}
    back = long_to_wide(long, dtypes={"tips": "int64"})
    pd.testing.assert_frame_equal(back, wide)


def test_output_name_clashes_with_measurement_column(rain_wide):
    wide = rain_wide.rename(columns={"north": "rainfall"})
    with pytest.raises(ReshapeError, match="clash"):
        wide_to_long(wide)
    with pytest.raises(ReshapeError, match="clash"):
        wide_to_long(rain_wide, names_to="value", values_to="value")
