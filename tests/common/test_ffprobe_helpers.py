import json
import subprocess

import pytest

import ffmeta.common.probe.ffprobe_helpers as helpers
from ffmeta.common.probe.ffprobe_helpers import build_ffprobe_cmd, run_ffprobe


def test_build_ffprobe_cmd_uses_json_flags():
    cmd = build_ffprobe_cmd("/media/video.mp4")
    assert cmd[0] == "ffprobe"
    assert "-show_streams" in cmd
    assert "-show_format" in cmd
    assert cmd[cmd.index("-print_format") + 1] == "json"
    assert cmd[-2:] == ["--", "/media/video.mp4"]


def test_build_ffprobe_cmd_options():
    cmd = build_ffprobe_cmd(
        "-weird-name.mkv", ffprobe_bin="/usr/local/bin/ffprobe", log_level="quiet", extra_args=["-count_frames"]
    )
    assert cmd[0] == "/usr/local/bin/ffprobe"
    assert cmd[cmd.index("-v") + 1] == "quiet"
    assert cmd.index("-count_frames") < cmd.index("--")
    assert cmd[-1] == "-weird-name.mkv"


def test_run_ffprobe_parses_stdout(monkeypatch):
    def fake_run(cmd, **kwargs):
        assert kwargs["check"] is True
        assert kwargs["timeout"] == 5
        assert kwargs["encoding"] == "utf-8"
        assert kwargs["errors"] == "replace"
        return subprocess.CompletedProcess(cmd, 0, stdout=json.dumps({"streams": []}), stderr="")

    monkeypatch.setattr(helpers.subprocess, "run", fake_run)
    assert run_ffprobe(["ffprobe"], timeout_sec=5) == {"streams": []}


def test_run_ffprobe_rejects_non_object(monkeypatch):
    monkeypatch.setattr(
        helpers.subprocess,
        "run",
        lambda cmd, **kw: subprocess.CompletedProcess(cmd, 0, stdout="[1, 2]", stderr=""),
    )
    with pytest.raises(json.JSONDecodeError):
        run_ffprobe(["ffprobe"])
