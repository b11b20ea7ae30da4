import os

import pytest
from liftoff_sim import cli


def write_telemetry(path):
    path.write_text(
        '{"time": 0, "velocity": 0, "altitude": 0}\n'
        '{"time": 10, "velocity": 100, "altitude": 1}\n'
        '{"time": 20, "velocity": 150, "altitude": 5}\n',
        encoding="utf-8",
    )
    return path


def test_parse_args_defaults():
    args = cli.parse_args([])
    assert args.output_dir == "plots"
    assert args.quiet is False
    assert args.no_plots is False
    assert args.duration is None


def test_headless_run(tmp_path, capsys):
    # Runs without plotting or GUI
    telem = write_telemetry(tmp_path / "data.json")
    cli.main(["--telemetry", str(telem), "--duration", "10", "--no-plots"])
    assert "MISSION SUMMARY" in capsys.readouterr().out


def test_run_with_plots(tmp_path):
    telem = write_telemetry(tmp_path / "data.json")
    out = tmp_path / "plots"
    cli.main(["-t", str(telem), "--duration", "10", "-o", str(out), "-q"])
    assert os.path.isfile(out / "rocket_model.png")


def test_failure_exits_nonzero(tmp_path, monkeypatch):
    def boom(config):
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, "run_mission", boom)
    with pytest.raises(SystemExit) as exc:
        cli.main(["--no-plots", "-q"])
    assert exc.value.code == 1
