import pytest

from venue_reports.config import load_app_config


def _write_config(tmp_path, text: str):
    path = tmp_path / "venue_reports_config.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_app_config_reads_all_sections(tmp_path):
    path = _write_config(
        tmp_path,
        """
        [database]
        engine = "sqlite"
        path = "db/venue.sqlite"

        [reports]
        default_granularity = "year"
        top_n = 5
        partial_payment_ratio = 0.4
        due_days_before_event = 14
        max_workers = 3

        [display]
        mode = "table"
        output_dir = "out"

        [logging]
        level = "debug"
        """,
    )

    cfg = load_app_config(str(path))

    assert cfg.database.engine == "sqlite"
    assert cfg.database.path == (tmp_path / "db" / "venue.sqlite").resolve()
    assert cfg.reports.default_granularity == "year"
    assert cfg.reports.top_n == 5
    assert cfg.reports.partial_payment_ratio == pytest.approx(0.4)
    assert cfg.reports.due_days_before_event == 14
    assert cfg.reports.max_workers == 3
    assert cfg.display.mode == "table"
    assert cfg.display.output_dir == (tmp_path / "out").resolve()
    assert cfg.log_level == "DEBUG"


def test_missing_sections_fall_back_to_defaults(tmp_path):
    cfg = load_app_config(str(_write_config(tmp_path, "")))

    assert cfg.database.path == (tmp_path / "data" / "db" / "venue.sqlite").resolve()
    assert cfg.reports.default_granularity == "month"
    assert cfg.reports.top_n == 10
    assert cfg.reports.partial_payment_ratio == 0.5
    assert cfg.reports.due_days_before_event == 30
    assert cfg.reports.max_workers == 1
    assert cfg.display.mode == "json"
    assert cfg.log_level == "WARNING"


def test_default_file_is_optional(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    cfg = load_app_config()

    assert cfg.database.path == (tmp_path / "data" / "db" / "venue.sqlite").resolve()


def test_explicit_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_app_config(str(tmp_path / "nope.toml"))


@pytest.mark.parametrize(
    "text",
    [
        "[reports]\ndefault_granularity = 'week'",
        "[reports]\npartial_payment_ratio = 1.5",
        "[reports]\ntop_n = 'many'",
        "[reports]\nmax_workers = 0",
        "[display]\nmode = 'html'",
        "[logging]\nlevel = 'LOUD'",
        "reports = 3",
        "[reports\n",
    ],
)
def test_invalid_values_raise_value_error(tmp_path, text):
    with pytest.raises(ValueError):
        load_app_config(str(_write_config(tmp_path, text)))
