"""Tests for the generate_dashboard_cli adapter."""

from decimal import Decimal
from pathlib import Path
from types import SimpleNamespace

from src.adapters import generate_dashboard_cli
from src.domain.errors import MissingIndexError


class _Logger:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def info(self, msg: str) -> None:
        self.messages.append(msg)

    def warning(self, msg: str) -> None:
        self.messages.append(msg)

    def error(self, msg: str) -> None:
        self.messages.append(msg)


def _paths(tmp_path: Path) -> SimpleNamespace:
    return SimpleNamespace(
        settings_file=tmp_path / "settings.json",
        database_dir=tmp_path / "database",
        dashboard_file=tmp_path / "dashboard.json",
    )


def test_main_runs_use_case_and_prints_summary(
    monkeypatch,
    capsys,
    tmp_path: Path,
) -> None:
    """The CLI should run the use case and print a summary line."""
    latest = SimpleNamespace(
        month="2024-10",
        totals=SimpleNamespace(net_worth=Decimal("208174.00")),
    )
    dashboard = SimpleNamespace(
        latest=latest,
        snapshots=[object(), latest],
        metadata=SimpleNamespace(base_currency="EUR"),
        warnings=[("2024-10", object())],
    )
    use_case = SimpleNamespace(execute=lambda: dashboard)
    paths = _paths(tmp_path)
    monkeypatch.setattr(generate_dashboard_cli, "build_paths", lambda: paths)
    monkeypatch.setattr(
        generate_dashboard_cli,
        "build_dashboard_use_case",
        lambda resolved: use_case,
    )
    monkeypatch.setattr(
        generate_dashboard_cli,
        "get_app_logger",
        lambda: _Logger(),
    )

    exit_code = generate_dashboard_cli.main()

    captured = capsys.readouterr().out
    assert exit_code == 0
    assert "2 months" in captured
    assert "latest 2024-10: net worth 208174.00 EUR" in captured
    assert "1 warnings" in captured


def test_main_returns_error_code_on_pipeline_error(
    monkeypatch,
    capsys,
    tmp_path: Path,
) -> None:
    """Fatal pipeline errors should be logged and mapped to exit code 1."""
    logger = _Logger()

    def _raise():
        raise MissingIndexError("2024-03")

    monkeypatch.setattr(
        generate_dashboard_cli,
        "build_paths",
        lambda: _paths(tmp_path),
    )
    monkeypatch.setattr(
        generate_dashboard_cli,
        "build_dashboard_use_case",
        lambda resolved: SimpleNamespace(execute=_raise),
    )
    monkeypatch.setattr(
        generate_dashboard_cli,
        "get_app_logger",
        lambda: logger,
    )

    exit_code = generate_dashboard_cli.main()

    assert exit_code == 1
    assert capsys.readouterr().out == ""
    assert any("2024-03" in message for message in logger.messages)


def test_main_reports_empty_database(
    monkeypatch,
    capsys,
    tmp_path: Path,
) -> None:
    """An empty database is not an error."""
    dashboard = SimpleNamespace(latest=None, snapshots=[], warnings=[])
    monkeypatch.setattr(
        generate_dashboard_cli,
        "build_paths",
        lambda: _paths(tmp_path),
    )
    monkeypatch.setattr(
        generate_dashboard_cli,
        "build_dashboard_use_case",
        lambda resolved: SimpleNamespace(execute=lambda: dashboard),
    )
    monkeypatch.setattr(
        generate_dashboard_cli,
        "get_app_logger",
        lambda: _Logger(),
    )

    exit_code = generate_dashboard_cli.main()

    assert exit_code == 0
    assert "No snapshots found" in capsys.readouterr().out
