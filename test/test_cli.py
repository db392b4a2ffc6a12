"""
Tests for the command line front end.
"""

import json

import pytest

from fakes import make_api, portal_handler, series_for
from src.sinaica import cli
from src.sinaica.support_functions.support_functions import TimeWindow
from src.utils.ai_logger import configure_logger


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    configure_logger()


def test_states(portal, capsys):
    api, _ = portal

    assert cli.main(["states"], api=api) == 0

    assert capsys.readouterr().out.splitlines() == ["Sonora", "Nuevo León"]


def test_stations_table(portal, capsys):
    api, _ = portal

    assert cli.main(["stations", "--state", "sonora"], api=api) == 0

    out = capsys.readouterr().out
    assert "StA" in out and "StC" in out
    assert "Obispado" not in out


def test_pollutants_to_file(portal, tmp_path):
    api, session = portal
    target = tmp_path / "sonora.json"

    code = cli.main(["pollutants", "SONORA", "--start-date", "20240301", "--window", "week",
                     "-o", str(target)], api=api)

    assert code == 0
    data = json.loads(target.read_text(encoding="utf-8"))
    assert [s["id"] for s in data] == ["100", "101", "110"]
    assert data[0]["pollutants"]["NO2"] == series_for("100", "NO2")
    posted = [c[3] for c in session.calls if c[0] == "POST"]
    assert {p["fechaIni"] for p in posted} == {"2024-03-01"}
    assert {p["rango"] for p in posted} == {2}


def test_pollutants_to_stdout_leaves_catalog_alone(portal, capsys):
    api, _ = portal

    assert cli.main(["pollutants", "Sonora"], api=api) == 0

    assert json.loads(capsys.readouterr().out)[0]["name"] == "StA"
    station = api.get_catalog().find_state("Sonora").networks[0].stations[0]
    assert station.pollutants["CO"] is None


def test_unknown_state_exits_with_error(portal, capsys):
    api, _ = portal

    assert cli.main(["pollutants", "Atlantis"], api=api) == 1
    assert "Atlantis" in capsys.readouterr().err


def test_broken_station_exits_with_error():
    api, _ = make_api(portal_handler(broken_station="101"))

    assert cli.main(["pollutants", "Sonora"], api=api) == 1


@pytest.mark.parametrize("argv", [
    ["pollutants", "Sonora", "--window", "year"],
    ["pollutants", "Sonora", "--start-date", "ayer"],
    [],
])
def test_bad_arguments(argv):
    with pytest.raises(SystemExit):
        cli.parse_args(argv)


def test_window_default():
    assert cli.parse_args(["pollutants", "Sonora"]).window is TimeWindow.DAY
