"""Integration tests for aquaflow commands against a temporary data directory."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import Mock, patch

from aquaflow.cli.cli_common import ExitCode


def add(run_cli, *args: str) -> dict:
    code, payload = run_cli("log", "add", *args)
    assert code == ExitCode.SUCCESS, payload
    return payload["data"]


class TestLogCommands:
    def test_add_intake(self, run_cli):
        entry = add(run_cli, "water", "--amount", "300", "--category", "coffee", "--at", "2025-02-10 09:00")

        assert entry["type"] == "WATER"
        assert entry["amount"] == 300
        assert entry["intakeTypeId"] == "coffee"
        assert entry["timestamp"] == "2025-02-10T14:00:00.000Z"

    def test_category_by_label(self, run_cli):
        entry = add(run_cli, "water", "--category", "TEA")

        assert entry["intakeTypeId"] == "tea"

    def test_default_amounts_from_settings(self, run_cli):
        assert add(run_cli, "water")["amount"] == 250
        assert add(run_cli, "urine")["amount"] == 400

        run_cli("settings", "set", "default-urine-amount", "350")
        assert add(run_cli, "URINE", "--urgency", "high")["amount"] == 350

    def test_note(self, run_cli):
        entry = add(run_cli, "note", "--notes", "Headache after lunch", "--amount", "100")

        assert entry["amount"] == 0
        assert "intakeTypeId" not in entry

    def test_quick_button(self, run_cli):
        code, payload = run_cli("log", "quick", "Big Glass")

        assert code == ExitCode.SUCCESS
        assert (payload["data"]["type"], payload["data"]["amount"], payload["data"]["notes"]) == (
            "WATER",
            350,
            "Big Glass",
        )

    def test_list_newest_first(self, run_cli):
        add(run_cli, "water", "--at", "2025-02-10 09:00")
        add(run_cli, "urine", "--at", "2025-02-10 11:00")
        add(run_cli, "water", "--at", "2025-02-10 10:00")

        code, payload = run_cli("log", "list", "--limit", "2")

        assert code == ExitCode.SUCCESS
        assert [e["timestamp"] for e in payload["data"]] == ["2025-02-10T16:00:00.000Z", "2025-02-10T15:00:00.000Z"]
        assert payload["meta"]["total"] == 3

    def test_edit_keeps_unspecified_fields(self, run_cli):
        entry = add(run_cli, "water", "--amount", "300", "--category", "tea", "--at", "2025-02-10 09:00")

        code, payload = run_cli("log", "edit", entry["id"], "--amount", "450")

        assert code == ExitCode.SUCCESS
        assert payload["data"]["id"] == entry["id"]
        assert payload["data"]["amount"] == 450
        assert payload["data"]["intakeTypeId"] == "tea"
        assert payload["data"]["timestamp"] == entry["timestamp"]

    def test_delete(self, run_cli):
        entry = add(run_cli, "water")

        code, payload = run_cli("log", "delete", entry["id"], "--yes")

        assert code == ExitCode.SUCCESS
        assert payload["data"] == {"id": entry["id"], "action": "deleted"}
        assert run_cli("log", "list")[1]["data"] == []

    def test_human_listing(self, run_cli, run_text):
        add(run_cli, "water", "--amount", "300", "--category", "coffee", "--at", "2025-02-10 09:00", "--notes", "Latte")

        code, out, _ = run_text("log", "list")

        assert code == ExitCode.SUCCESS
        assert "2025-02-10 09:00" in out
        assert "Coffee" in out
        assert "Latte" in out


class TestViews:
    def test_today(self, run_cli):
        add(run_cli, "water", "--amount", "300")
        add(run_cli, "urine", "--amount", "100")

        code, payload = run_cli("today")

        assert code == ExitCode.SUCCESS
        data = payload["data"]
        assert (data["intake_total"], data["urine_total"], data["net_volume"]) == (300, 100, 200)
        assert [e["type"] for e in data["entries"]] == ["WATER", "URINE"]

    def test_calendar_month(self, run_cli):
        add(run_cli, "water", "--amount", "500", "--at", "2025-02-03 09:00")

        code, payload = run_cli("calendar", "--month", "2025-02")

        assert code == ExitCode.SUCCESS
        weeks = payload["data"]["weeks"]
        assert len(weeks) == 5
        assert weeks[1][1] == {"date": "2025-02-03", "in_month": True, "intake": 500, "output": 0, "net": 500}

    def test_calendar_day(self, run_cli):
        add(run_cli, "water", "--amount", "500", "--at", "2025-02-03 09:00")
        add(run_cli, "urine", "--amount", "200", "--at", "2025-02-03 23:30")

        code, payload = run_cli("calendar", "--day", "2025-02-03")

        assert code == ExitCode.SUCCESS
        assert payload["data"]["net"] == 300
        assert len(payload["data"]["entries"]) == 2

    def test_report(self, run_cli):
        add(run_cli, "water", "--amount", "400", "--at", "2025-02-10 09:00")
        add(run_cli, "urine", "--amount", "300", "--at", "2025-02-10 14:00")
        add(run_cli, "water", "--amount", "200", "--at", "2025-02-12 09:00")

        code, payload = run_cli("report", "--from", "2025-02-10", "--to", "2025-02-12")

        assert code == ExitCode.SUCCESS
        data = payload["data"]
        assert data["active_days"] == 2
        assert data["stats"]["avg_intake_per_day"] == 300
        assert len(data["trend"]) == 3
        assert data["trend"][1] == {"date": "2025-02-11", "intake": 0, "output": 0, "net": 0}

    def test_report_inverted_time_window(self, run_cli):
        add(run_cli, "water", "--at", "2025-02-10 09:30")

        code, payload = run_cli(
            "report", "--from", "2025-02-01", "--to", "2025-02-28", "--start-time", "10:00", "--end-time", "09:00"
        )

        assert code == ExitCode.SUCCESS
        assert payload["data"]["entry_count"] == 0
        assert payload["data"]["active_days"] == 1

    def test_report_text(self, run_cli, run_text):
        add(run_cli, "water", "--amount", "400", "--at", "2025-02-10 09:00")

        code, out, _ = run_text("report", "--from", "2025-02-10", "--to", "2025-02-10")

        assert code == ExitCode.SUCCESS
        assert "Morning" in out
        assert "Intake: 400 ml" in out


class TestExportImport:
    def test_export_nothing(self, run_text):
        code, out, _ = run_text("export")

        assert code == ExitCode.CONFLICT_IDEMPOTENT
        assert "No data to export." in out

    def test_export_to_file(self, run_cli, tmp_path: Path):
        add(run_cli, "water", "--amount", "300", "--category", "coffee", "--at", "2025-02-10 09:00", "--notes", 'He said "hi"')
        target = tmp_path / "out.csv"

        code, payload = run_cli("export", "--output", str(target))

        assert code == ExitCode.SUCCESS
        assert payload["data"]["count"] == 1
        assert target.read_text(encoding="utf-8").split("\n") == [
            "Type,Intake Type,Amount (ml),Timestamp,Notes",
            'Intake,Coffee,300,2025-02-10 09:00:00,"He said ""hi"""',
        ]

    def test_export_to_directory_uses_timestamped_name(self, run_cli, tmp_path: Path):
        add(run_cli, "water")
        out_dir = tmp_path / "exports"
        out_dir.mkdir()

        code, payload = run_cli("export", "--output", str(out_dir))

        assert code == ExitCode.SUCCESS
        name = Path(payload["data"]["path"]).name
        assert name.startswith("aquaflow_export_") and name.endswith(".csv")

    def test_export_window_to_stdout(self, run_cli, run_text):
        add(run_cli, "water", "--at", "2025-02-10 09:00")
        add(run_cli, "water", "--at", "2025-02-20 09:00")

        code, out, _ = run_text("export", "--from", "2025-02-09", "--to", "2025-02-11", "--output", "-")

        assert code == ExitCode.SUCCESS
        assert out.strip().split("\n")[1:] == ['Intake,,250,2025-02-10 09:00:00,""']

    def test_import_and_reimport(self, run_cli, tmp_path: Path):
        existing = add(run_cli, "water", "--amount", "250", "--at", "2025-02-10 09:00")
        source = tmp_path / "backup.json"
        source.write_text(
            json.dumps(
                {
                    "entries": [
                        {**existing, "id": "other-id"},
                        {"id": "b", "type": "URINE", "amount": 300, "timestamp": "2025-02-11T15:00:00.000Z"},
                    ]
                }
            ),
            encoding="utf-8",
        )

        code, payload = run_cli("import", str(source))
        assert code == ExitCode.SUCCESS
        assert payload["data"]["added"] == 1
        assert payload["data"]["skipped"] == 1

        code, payload = run_cli("import", str(source))
        assert code == ExitCode.CONFLICT_IDEMPOTENT
        assert payload["status"] == "warning"


class TestSampleData:
    def test_generate_and_clear(self, run_cli):
        real = add(run_cli, "water")

        code, payload = run_cli("sample", "generate", "--days", "2")
        assert code == ExitCode.SUCCESS
        generated = payload["data"]["added"]
        assert 14 <= generated <= 22

        code, payload = run_cli("sample", "clear")
        assert code == ExitCode.SUCCESS
        assert payload["data"]["removed"] == generated
        assert [e["id"] for e in run_cli("log", "list")[1]["data"]] == [real["id"]]

        code, _ = run_cli("sample", "clear")
        assert code == ExitCode.CONFLICT_IDEMPOTENT


class TestSettingsCommands:
    def test_show_defaults(self, run_cli):
        code, payload = run_cli("settings", "show")

        assert code == ExitCode.SUCCESS
        assert payload["data"]["defaultWaterAmount"] == 250
        assert len(payload["data"]["quickButtons"]) == 6

    def test_changes_persist(self, run_cli, data_dir: Path):
        run_cli("settings", "set", "theme", "dark")
        run_cli("settings", "category", "add", "Kombucha")
        run_cli("settings", "button", "add", "water", "Mug", "300")
        run_cli("settings", "daypart", "morning", "05:00", "10:59")

        stored = json.loads((data_dir / "aquaflow_settings.json").read_text(encoding="utf-8"))

        assert stored["theme"] == "DARK"
        assert [c["label"] for c in stored["intakeCategories"][-2:]] == ["Kombucha", "Other"]
        assert stored["quickButtons"][-1]["label"] == "Mug"
        assert stored["dayParts"]["morning"] == {"start": "05:00", "end": "10:59"}

    def test_move_category(self, run_cli):
        code, payload = run_cli("settings", "category", "move", "2", "1")

        assert code == ExitCode.SUCCESS
        assert [c["id"] for c in payload["data"]["intakeCategories"][:3]] == ["none", "coffee", "water"]

    def test_remove_button(self, run_cli):
        code, payload = run_cli("settings", "button", "remove", "1")

        assert code == ExitCode.SUCCESS
        assert [b["id"] for b in payload["data"]["quickButtons"]] == ["2", "3", "4", "5", "6"]

    def test_show_text(self, run_text):
        code, out, _ = run_text("settings", "show")

        assert code == ExitCode.SUCCESS
        assert "Other (fixed)" in out
        assert "night" in out


class TestInsightsCommands:
    def seed(self, run_cli):
        for hour in ("08:00", "09:00", "10:00"):
            add(run_cli, "water", "--at", f"2025-02-10 {hour}")

    def test_report(self, run_cli, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "test-key")
        self.seed(run_cli)

        mock_response = Mock(status_code=200)
        mock_response.json.return_value = {"candidates": [{"content": {"parts": [{"text": "## Summary"}]}}]}

        with patch("httpx.Client") as mock_client:
            post = mock_client.return_value.__enter__.return_value.post
            post.return_value = mock_response

            code, payload = run_cli("insights", "report")

        assert code == ExitCode.SUCCESS
        assert payload["data"]["answer"] == "## Summary"
        assert post.call_args.kwargs["headers"]["x-goog-api-key"] == "test-key"

    def test_model_failure_uses_fallback(self, run_cli, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "test-key")
        self.seed(run_cli)

        with patch("httpx.Client") as mock_client:
            mock_client.return_value.__enter__.return_value.post.return_value = Mock(status_code=500, text="boom")

            code, payload = run_cli("insights", "ask", "Is my intake normal?")

        assert code == ExitCode.SUCCESS
        assert payload["data"]["answer"].startswith("Oops! Something went wrong")

    def test_not_enough_logs(self, run_cli, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "test-key")

        with patch("httpx.Client") as mock_client:
            code, payload = run_cli("insights", "report")

        assert code == ExitCode.SUCCESS
        assert payload["data"]["answer"] == "I need at least 3 logs to start detecting patterns!"
        mock_client.assert_not_called()
