import pytest

from realty_eda.transforms.summary import STATS, describe_by


def test_describe_by_location(sales):
    out = describe_by(sales, "location")
    assert list(out.columns) == ["location"] + STATS
    assert out["location"].tolist() == ["Alpha", "Beta", "Gamma"]
    assert out["count"].tolist() == [3, 4, 1]
    assert out.loc[0, "mean"] == pytest.approx(250000.0)
    assert out.loc[1, "max"] == 610000.0


def test_describe_by_several_keys(sales):
    out = describe_by(sales, ["classification", "location"], value="area")
    assert len(out) == 3
    assert out.loc[0, "median"] == 150.0
