"""Tests for the command line entry point."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import pytest

from aranet.__main__ import build_config, main, parse_args
from aranet.exceptions import SearchTimeoutError


def test_main_demo_json(capsys):
    """Test a single demo reading printed as JSON."""
    assert main(["--demo", "--json", "--info"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["measurements"]["co2"] >= 0
    assert data["measurements"]["status"] in ("GREEN", "AMBER", "RED")
    assert data["info"]["model_number"] == "Aranet4"


def test_main_demo_table(capsys):
    assert main(["--demo"]) == 0

    out = capsys.readouterr().out
    assert "CO2" in out
    assert "ppm" in out


def test_main_output_file(tmp_path):
    """Test the report file holds device info followed by the readings."""
    output = tmp_path / "aranet.txt"

    assert main(["--demo", "-o", str(output)]) == 0

    lines = output.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 10
    assert lines[0] == "SAF Tehnika"
    assert lines[1] == "Aranet4"
    assert int(lines[7]) >= 0


def test_main_watch_count(capsys):
    """Test watch mode stops after --count readings."""
    with patch("aranet.console.asyncio.sleep", new_callable=AsyncMock):
        assert main(["--demo", "--json", "--watch", "5", "--count", "3"]) == 0

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 3
    assert all("measurements" in json.loads(line) for line in lines)


def test_main_connect_error():
    """Test connection failures exit with status 1."""
    with patch("aranet.app.connect", AsyncMock(side_effect=SearchTimeoutError(10))):
        assert main(["--timeout", "10"]) == 1


def test_main_missing_config(tmp_path):
    assert main(["-c", str(tmp_path / "missing.yaml"), "--demo"]) == 1


def test_main_invalid_yaml(tmp_path):
    path = tmp_path / "aranet.yaml"
    path.write_text("device: [unclosed\n", encoding="utf-8")

    assert main(["-c", str(path), "--demo"]) == 1


def test_build_config_overrides(tmp_path):
    """Test command line options override the configuration file."""
    path = tmp_path / "aranet.yaml"
    path.write_text("device:\n  scan_timeout: 20\nwatch_interval: 60\n", encoding="utf-8")

    config = build_config(parse_args(["-c", str(path), "-a", "aa:bb:cc:dd:ee:ff", "--timeout", "5"]))

    assert config.device.address == "AA:BB:CC:DD:EE:FF"
    assert config.device.scan_timeout == 5
    assert config.watch_interval == 60


def test_build_config_watch_without_value_keeps_config(tmp_path):
    path = tmp_path / "aranet.yaml"
    path.write_text("watch_interval: 60\n", encoding="utf-8")

    assert build_config(parse_args(["-c", str(path), "--watch"])).watch_interval == 60
    assert build_config(parse_args(["-c", str(path), "--watch", "0"])).watch_interval == 0


def test_build_config_defaults(tmp_path, monkeypatch):
    """Test no configuration file is needed."""
    monkeypatch.chdir(tmp_path)

    config = build_config(parse_args([]))

    assert config.device.address is None
    assert config.device.scan_timeout == 10.0


def test_main_top_level_list_config(tmp_path, capsys):
    """Test a config file that is not a mapping falls back to defaults."""
    path = tmp_path / "aranet.yaml"
    path.write_text("- device\n", encoding="utf-8")

    assert main(["-c", str(path), "--demo", "--json"]) == 0
    assert "measurements" in json.loads(capsys.readouterr().out)


def test_main_unwritable_output(tmp_path):
    """Test a report file that cannot be written exits with status 1."""
    assert main(["--demo", "-o", str(tmp_path / "nodir" / "aranet.txt")]) == 1


def test_main_watch_unwritable_output(tmp_path, capsys, caplog):
    """Test watch mode keeps reading when the report file cannot be written."""
    output = tmp_path / "nodir" / "aranet.txt"

    with patch("aranet.console.asyncio.sleep", new_callable=AsyncMock):
        assert main(["--demo", "--json", "--watch", "5", "--count", "2", "-o", str(output)]) == 0

    assert len(capsys.readouterr().out.strip().splitlines()) == 2
    assert "Failed to write report" in caplog.text


@pytest.mark.parametrize("count", ["0", "-1"])
def test_parse_args_rejects_count_below_one(count):
    with pytest.raises(SystemExit) as exc_info:
        parse_args(["--count", count])

    assert exc_info.value.code == 2
