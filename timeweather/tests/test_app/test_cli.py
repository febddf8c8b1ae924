"""Tests for CLI commands."""

from pathlib import Path

import httpx
import respx

from timeweather.cli import main

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        assert main([]) == 1

    def test_config_show(self, capsys):
        result = main(["config", "show"])
        assert result == 0
        captured = capsys.readouterr()
        assert "richmond" in captured.out
        assert "open-meteo" in captured.out

    def test_missing_config_file(self, tmp_path: Path, capsys):
        result = main(["--config", str(tmp_path / "missing.yaml"), "cities"])
        assert result == 1
        assert "Error" in capsys.readouterr().out

    def test_cities(self, capsys):
        assert main(["cities"]) == 0
        out = capsys.readouterr().out
        for key in ("richmond", "dc", "nyc", "london", "bristol"):
            assert key in out
        assert "(default)" in out

    def test_set_requires_something(self, tmp_path: Path, capsys):
        assert main(["--db", str(tmp_path / "s.db"), "set"]) == 1

    def test_set_unknown_city(self, tmp_path: Path, capsys):
        result = main(["--db", str(tmp_path / "s.db"), "set", "--city", "paris"])
        assert result == 1
        assert "paris" in capsys.readouterr().out

    @respx.mock
    def test_set_then_show(self, tmp_path: Path, capsys, current_payload: dict):
        route = respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, json=current_payload)
        )
        db = str(tmp_path / "s.db")

        assert main(["--db", db, "set", "--city", "london", "--unit", "celsius"]) == 0
        assert "London (celsius)" in capsys.readouterr().out

        assert main(["--db", db, "show"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("London\n")
        assert "Weather: 68°C • Clear • Wind 6 mph" in out
        assert "Map: https://www.openstreetmap.org/?mlat=51.5072" in out
        assert route.calls[0].request.url.params["temperature_unit"] == "celsius"

    def test_set_unit_only_keeps_city(self, tmp_path: Path, capsys):
        db = str(tmp_path / "s.db")
        main(["--db", db, "set", "--city", "dc"])
        capsys.readouterr()
        assert main(["--db", db, "set", "--unit", "celsius"]) == 0
        assert "Washington, DC (celsius)" in capsys.readouterr().out

    @respx.mock
    def test_show_with_server_error(self, tmp_path: Path, capsys):
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(500))
        result = main(["--db", str(tmp_path / "s.db"), "show"])
        assert result == 0
        out = capsys.readouterr().out
        assert out.startswith("Richmond, VA\n")
        assert "Weather: Weather unavailable" in out
