"""Tests for the command line interface."""

import json

import pytest
from typer.testing import CliRunner

from cli.display import console
from cli.parser import app

runner = CliRunner()


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Point the CLI at a temporary offline store."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PLANISPHERE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("PLANISPHERE_EXPORT_DIR", str(tmp_path / "exports"))
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("PLANISPHERE_STORE", "file")
    monkeypatch.setenv("PLANISPHERE_USER", "user-1")
    return tmp_path


def stored_events(tmp_path):
    data = json.loads((tmp_path / "data" / "events.json").read_text())
    return data["events"]


def add(*args):
    return runner.invoke(app, ["add", *args])


def test_add_and_show(cli_env):
    """Added events appear in the month agenda."""
    result = add("2024-06-01", "Standup", "--start", "09:00", "--end", "09:15", "-c", "work")
    assert result.exit_code == 0, result.output
    assert "Added 'Standup' on 2024-06-01" in result.output

    result = runner.invoke(app, ["show", "--month", "2024-06"])
    assert result.exit_code == 0
    assert "June 2024" in result.output
    assert "Standup" in result.output

    events = stored_events(cli_env)
    assert [(e["date"], e["user_id"]) for e in events] == [("2024-06-01", "user-1")]


def test_add_invalid_date(cli_env):
    """Malformed dates are rejected as bad parameters."""
    result = add("06/01/2024", "Standup", "--start", "09:00", "--end", "09:15")
    assert result.exit_code == 2


def test_add_invalid_time(cli_env):
    """Invalid times fail without writing anything."""
    result = add("2024-06-01", "Standup", "--start", "9am", "--end", "09:15")
    assert result.exit_code == 1
    assert not (cli_env / "data" / "events.json").exists()


def test_add_requires_user(cli_env, monkeypatch):
    """Writes need a user from --user or PLANISPHERE_USER."""
    monkeypatch.delenv("PLANISPHERE_USER")
    result = add("2024-06-01", "Standup", "--start", "09:00", "--end", "09:15")
    assert result.exit_code == 1

    result = runner.invoke(
        app,
        ["--user", "cli-user", "add", "2024-06-01", "Standup", "--start", "09:00", "--end", "09:15"],
    )
    assert result.exit_code == 0
    assert stored_events(cli_env)[0]["user_id"] == "cli-user"


def test_move_between_days(cli_env):
    """move relocates the event at a position to another day."""
    add("2024-06-01", "Standup", "--start", "09:00", "--end", "09:15")
    add("2024-06-01", "Review", "--start", "15:00", "--end", "16:00")

    result = runner.invoke(app, ["move", "2024-06-01", "1", "2024-06-02", "0"])
    assert result.exit_code == 0, result.output

    events = stored_events(cli_env)
    assert [(e["date"], e["name"]) for e in events] == [
        ("2024-06-01", "Standup"),
        ("2024-06-02", "Review"),
    ]


def test_move_within_day(cli_env):
    """Reordering within a day is persisted by the offline store."""
    add("2024-06-01", "Standup", "--start", "09:00", "--end", "09:15")
    add("2024-06-01", "Review", "--start", "15:00", "--end", "16:00")

    result = runner.invoke(app, ["move", "2024-06-01", "1", "2024-06-01", "0"])
    assert result.exit_code == 0

    assert [e["name"] for e in stored_events(cli_env)] == ["Review", "Standup"]


def test_move_noop_and_missing(cli_env):
    """No-op moves succeed quietly; missing events fail."""
    add("2024-06-01", "Standup", "--start", "09:00", "--end", "09:15")

    result = runner.invoke(app, ["move", "2024-06-01", "0", "2024-06-01", "0"])
    assert result.exit_code == 0
    assert "Nothing to move" in result.output

    result = runner.invoke(app, ["move", "2024-06-01", "5", "2024-06-02"])
    assert result.exit_code == 1


def test_delete(cli_env):
    """delete --force removes the event from the store."""
    add("2024-06-01", "Standup", "--start", "09:00", "--end", "09:15")
    event_id = stored_events(cli_env)[0]["id"]

    result = runner.invoke(app, ["delete", event_id, "--force"])
    assert result.exit_code == 0
    assert stored_events(cli_env) == []


def test_delete_missing(cli_env):
    """Deleting an unknown id fails."""
    result = runner.invoke(app, ["delete", "missing", "--force"])
    assert result.exit_code == 1


def test_delete_cancelled(cli_env):
    """Declining the prompt keeps the event."""
    add("2024-06-01", "Standup", "--start", "09:00", "--end", "09:15")
    event_id = stored_events(cli_env)[0]["id"]

    result = runner.invoke(app, ["delete", event_id], input="n\n")
    assert result.exit_code == 0
    assert len(stored_events(cli_env)) == 1


def test_export_csv(cli_env):
    """export writes a file named after the month."""
    add("2024-06-01", "Standup", "--start", "09:00", "--end", "09:15", "-c", "work")

    result = runner.invoke(app, ["export", "csv", "--month", "2024-06"])
    assert result.exit_code == 0, result.output

    path = cli_env / "exports" / "calendar-events-June 2024.csv"
    lines = path.read_text(encoding="utf-8").split("\n")
    assert lines[1] == "2024-06-01,Standup,09:00,09:15,work,"


def test_export_unsupported_format(cli_env):
    """Unknown export formats fail."""
    result = runner.invoke(app, ["export", "ics", "--month", "2024-06"])
    assert result.exit_code == 1


def test_console_leaves_agenda_text_unstyled():
    """Dates, times and ids are printed without automatic highlighting."""
    text = console.render_str("0. 09:00-09:15 Standup 2024-06-01 3f2a")
    assert text.spans == []
