from datetime import date

import pytest

from venue_reports.io import read_ledger_csv


def test_read_ledger_csv_normalizes_headers_and_types(tmp_path):
    path = tmp_path / "weddings.csv"
    path.write_text(
        "Wedding_ID, Wedding_Date ,Equipment_Rental_Cost,Payment_Status,notes\n"
        "1,2024-03-15,1000,Partial,first\n"
        "2,2024-03-20,,paid,second\n",
        encoding="utf-8",
    )

    df = read_ledger_csv(path, "wedding")

    assert list(df.columns) == [
        "wedding_id",
        "wedding_date",
        "equipment_rental_cost",
        "payment_status",
    ]
    assert list(df["wedding_date"]) == [date(2024, 3, 15), date(2024, 3, 20)]
    assert df["equipment_rental_cost"].iloc[0] == 1000.0
    assert df["equipment_rental_cost"].isna().iloc[1]
    assert list(df["payment_status"]) == ["partial", "paid"]


def test_missing_required_column(tmp_path):
    path = tmp_path / "packages.csv"
    path.write_text("package_id,selling_price\n1,5000\n", encoding="utf-8")

    with pytest.raises(ValueError, match="package_name"):
        read_ledger_csv(path, "package")


def test_invalid_numbers_and_dates_are_rejected(tmp_path):
    bad_number = tmp_path / "bad_number.csv"
    bad_number.write_text(
        "package_id,package_name,selling_price\n1,Gold,lots\n", encoding="utf-8"
    )
    with pytest.raises(ValueError, match="selling_price"):
        read_ledger_csv(bad_number, "package")

    bad_date = tmp_path / "bad_date.csv"
    bad_date.write_text("wedding_id,wedding_date\n1,not-a-date\n", encoding="utf-8")
    with pytest.raises(ValueError, match="wedding_date"):
        read_ledger_csv(bad_date, "wedding")


def test_unknown_table(tmp_path):
    with pytest.raises(ValueError, match="Unknown ledger table"):
        read_ledger_csv(tmp_path / "x.csv", "payments")
