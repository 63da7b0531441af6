"""
Unit tests for address file loading and batch resolution.
"""

import pandas as pd
import pytest

from address_resolver.address_loader import AddressLoader, resolve_batch


def test_load_csv_with_aliased_columns(tmp_path):
    path = tmp_path / "addresses.csv"
    path.write_text(
        "COUNTRY,Town,Street Name,House No\n"
        "Georgia,Tbilisi,Rustaveli,12\n"
        "Georgia,Tbilisi,Chavchavadze,\n",
        encoding="utf-8",
    )

    df = AddressLoader().load(path)

    assert list(df.columns) == ["country", "city", "street", "house_number"]
    assert df.loc[0, "house_number"] == "12"
    assert df.loc[1, "house_number"] == ""


def test_house_number_column_is_optional(tmp_path):
    path = tmp_path / "addresses.csv"
    path.write_text("country,city,street\nGeorgia,Tbilisi,Rustaveli\n", encoding="utf-8")

    df = AddressLoader().load(path)

    assert df.loc[0, "house_number"] == ""


def test_house_numbers_stay_text(tmp_path):
    path = tmp_path / "addresses.csv"
    path.write_text("country,city,street,house_number\nGeorgia,Tbilisi,Rustaveli,007\n", encoding="utf-8")

    assert AddressLoader().load(path).loc[0, "house_number"] == "007"


def test_load_excel(tmp_path):
    path = tmp_path / "addresses.xlsx"
    pd.DataFrame({
        "Country": ["Georgia"],
        "City": ["Tbilisi"],
        "Street": ["Rustaveli"],
        "Number": ["500"],
    }).to_excel(path, index=False)

    df = AddressLoader().load(path)

    assert df.loc[0, "street"] == "Rustaveli"
    assert df.loc[0, "house_number"] == "500"


def test_missing_required_column(tmp_path):
    path = tmp_path / "addresses.csv"
    path.write_text("country,street\nGeorgia,Rustaveli\n", encoding="utf-8")

    with pytest.raises(ValueError, match="city"):
        AddressLoader().load(path)


def test_unsupported_format(tmp_path):
    path = tmp_path / "addresses.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ValueError):
        AddressLoader().load(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        AddressLoader().load(tmp_path / "nope.csv")


def test_resolve_batch(resolver):
    addresses = pd.DataFrame({
        "country": ["Georgia", "Georgia", "Armenia", ""],
        "city": ["Tbilisi", "Atlantis", "Yerevan", "Tbilisi"],
        "street": ["Rustaveli", "Rustaveli", "Abovyan", "Rustaveli"],
        "house_number": ["500", "", "1", ""],
    })

    resolved = resolve_batch(resolver, addresses, show_progress=False)

    assert list(resolved["success"]) == [True, False, True, False]
    assert resolved["source"].tolist() == ["LocalDataset", "LocalDataset", "RemoteProvider", None]
    assert resolved.loc[3, "source"] is None
    assert resolved.loc[0, "formatted_address"] is None
    assert resolved.loc[0, "latitude"] == pytest.approx(41.71)
    assert list(resolved["interpolated"]) == [True, False, False, False]
    assert resolved.loc[2, "formatted_address"] == "Abovyan St 1, Yerevan, Armenia"
    assert pd.isna(resolved.loc[1, "latitude"])
    # input frame is untouched
    assert "success" not in addresses.columns
