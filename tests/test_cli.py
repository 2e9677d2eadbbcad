"""
CLI tests through click's CliRunner; JSON is parsed from result.stdout only.
"""

import json
from unittest.mock import Mock, patch

from click.testing import CliRunner
from DrExtract.__main__ import main


def test_extract_from_file(tmp_path, oxygen_note):
    note_file = tmp_path / "note.txt"
    note_file.write_text(oxygen_note, encoding="utf-8")

    result = CliRunner().invoke(main, ["extract", str(note_file), "--no-timestamp"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "device": "Oxygen Tank",
        "liters": "5 L",
        "usage": "sleep and exertion",
        "ordering_provider": "Dr. Smith",
    }


def test_extract_missing_file_uses_sample_note(tmp_path):
    result = CliRunner().invoke(main, ["extract", str(tmp_path / "missing.txt")])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["device"] == "CPAP"
    assert payload["ordering_provider"] == "Dr. Cameron"
    assert "processed_timestamp" in payload


def test_extract_literal_text_reports_warnings():
    result = CliRunner().invoke(main, ["extract", "--text", "Follow up in two weeks."])
    assert result.exit_code == 0, result.output
    assert '"device":"Unknown"' in result.output
    assert "Warnings found in note" in result.output


def test_extract_pretty(cpap_note):
    result = CliRunner().invoke(main, ["extract", "-t", cpap_note, "--pretty"])
    assert result.exit_code == 0, result.output
    assert '  "mask_type": "FullFace"' in result.output


def test_extract_uses_env_note_path(tmp_path, monkeypatch):
    note_file = tmp_path / "env_note.txt"
    note_file.write_text("Wheelchair for mobility. Ordered by Dr. Wilson.", encoding="utf-8")
    monkeypatch.setenv("DREXTRACT_NOTE_PATH", str(note_file))

    result = CliRunner().invoke(main, ["extract", "--no-timestamp"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"device": "Wheelchair", "ordering_provider": "Dr. Wilson"}


def test_bad_env_timeout_exits_1(monkeypatch):
    monkeypatch.setenv("DREXTRACT_TIMEOUT", "soon")
    result = CliRunner().invoke(main, ["extract", "-t", "CPAP"])
    assert result.exit_code == 1


def test_process_posts_to_endpoint(tmp_path, cpap_note):
    note_file = tmp_path / "note.txt"
    note_file.write_text(cpap_note, encoding="utf-8")

    with patch("DrExtract.transmitter.requests.Session") as session_cls:
        session = session_cls.return_value
        session.post.return_value = Mock(status_code=200)
        result = CliRunner().invoke(
            main,
            ["process", str(note_file), "--endpoint", "http://localhost/DrExtract", "--no-timestamp"],
        )

    assert result.exit_code == 0, result.output
    assert "status code 200" in result.output
    args, kwargs = session.post.call_args
    assert args[0] == "http://localhost/DrExtract"
    assert json.loads(kwargs["data"])["ordering_provider"] == "Dr. Cameron"


def test_process_http_failure_still_exits_0(cpap_note, tmp_path):
    note_file = tmp_path / "note.txt"
    note_file.write_text(cpap_note, encoding="utf-8")

    with patch("DrExtract.transmitter.requests.Session") as session_cls:
        session_cls.return_value.post.return_value = Mock(status_code=502)
        result = CliRunner().invoke(main, ["process", str(note_file)])

    assert result.exit_code == 0, result.output
    assert "status code 502" in result.output


def test_process_unhandled_failure_exits_1(tmp_path):
    with patch("DrExtract.__main__.extract", side_effect=RuntimeError("boom")):
        result = CliRunner().invoke(main, ["process", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1
    assert "boom" in result.output


def test_log_file_receives_entries(tmp_path, cpap_note):
    log_file = tmp_path / "run.log"
    result = CliRunner().invoke(
        main, ["--log-file-path", str(log_file), "extract", "-t", cpap_note]
    )
    assert result.exit_code == 0, result.output
    assert "Identified device type: CPAP" in log_file.read_text(encoding="utf-8")


def test_repeated_invocations_do_not_duplicate_log_lines(tmp_path, cpap_note):
    log_file = tmp_path / "repeat.log"
    runner = CliRunner()
    for _ in range(3):
        result = runner.invoke(main, ["--log-file-path", str(log_file), "extract", "-t", cpap_note])
        assert result.exit_code == 0, result.output
    assert log_file.read_text(encoding="utf-8").count("Identified device type: CPAP") == 3
