from confplanner.__main__ import main


def test_timeline_command(data_file, capsys):
    assert main(["--data", str(data_file), "timeline", "--query", "intro"]) == 0
    out = capsys.readouterr().out
    assert "Intro to X" in out
    assert "Deep Dive Y" not in out


def test_tracks_command(data_file, capsys):
    assert main(["--data", str(data_file), "tracks"]) == 0
    assert capsys.readouterr().out.split() == ["design", "dev"]


def test_bad_day_exits_with_error(data_file, capsys):
    assert main(["--data", str(data_file), "timeline", "--day", "5"]) == 1
    assert "out of range" in capsys.readouterr().err


def test_missing_data_exits_with_error(tmp_path, capsys):
    assert main(["--data", str(tmp_path / "missing.json"), "speakers"]) == 1
    assert "Could not fetch" in capsys.readouterr().err


def test_export_command(data_file, tmp_path):
    output = tmp_path / "day.ics"
    assert main(["--data", str(data_file), "export", str(output), "--exclude-track", "design"]) == 0
    assert b"Deep Dive Y" in output.read_bytes()
    assert b"Intro to X" not in output.read_bytes()
