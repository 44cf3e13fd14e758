import json

from scripts.cli import load_frames, main


def test_cli_replays_frames(frames_path, tmp_path, capsys):
    out = tmp_path / "out" / "moods.json"
    assert main(["--frames", str(frames_path), "--out", str(out)]) == 0

    result = json.loads(out.read_text(encoding="utf-8"))
    assert len(result["timeline"]) == 16
    assert result["timeline"][5]["flag"] == "NO_FACE"
    assert result["timeline"][-1]["mood"] == "happy"
    assert result["summary"]["frames"] == 16
    assert "timeline" in json.loads(capsys.readouterr().out)


def test_load_frames_jsonl(tmp_path):
    p = tmp_path / "frames.jsonl"
    p.write_text('{"timestamp": 0.0, "blendshapes": {"jawOpen": 0.1}}\n\n{"timestamp": 0.1}\n', encoding="utf-8")
    frames = load_frames(str(p))
    assert [f["timestamp"] for f in frames] == [0.0, 0.1]


def test_cli_bad_input(tmp_path, capsys):
    p = tmp_path / "bad.json"
    p.write_text(json.dumps([{"timestamp": 0.0, "blendshapes": {"jawOpen": "x"}}]), encoding="utf-8")
    assert main(["--frames", str(p), "--out", str(tmp_path / "o.json")]) == 2
    assert "invalid feature input" in capsys.readouterr().err
    assert main(["--frames", str(tmp_path / "missing.json")]) == 2
