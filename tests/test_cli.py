import os
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

import whispcli.cli as cli
import whispcli.model as model
import whispcli.transcriber as transcriber


class DummySegment:
    def __init__(self, text: str):
        self.text = text


class FakeModel:
    def __init__(self, path, **params):
        os.write(2, b"whisper_init_from_file: loading model\n")

    def get_params(self):
        return {}

    def transcribe(self, media, language=None):
        os.write(1, b"whisper_print_timings: total time = 1.00 ms\n")
        return [DummySegment("hello"), DummySegment("world")]


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "CONFIG_PATH", str(tmp_path / "whispcli.json"))
    monkeypatch.setattr(cli, "MODELS_DIR", str(tmp_path / "models"))
    monkeypatch.setattr(model, "Model", FakeModel)
    monkeypatch.setattr(
        transcriber, "load_media_samples", lambda path, logger: np.zeros(1600, dtype=np.float32)
    )
    media = tmp_path / "talk.mp4"
    media.write_bytes(b"\x00")
    model_file = tmp_path / "ggml-base.en.bin"
    model_file.write_bytes(b"lmgg")
    return tmp_path, str(media), str(model_file)


def test_version(capsys):
    assert cli.main(["version"]) == 0
    assert capsys.readouterr().out == "whispcli: 0.3.0\n"


def test_no_command_prints_usage(capsys):
    assert cli.main([]) == 1
    err = capsys.readouterr().err
    assert "usage: whispcli" in err
    assert "setup" in err


def test_stream_mode_prints_only_transcript(workspace, capsys):
    _tmp, media, model_file = workspace
    assert cli.main(["--model", model_file, "--stdout", "transcribe", media]) == 0
    captured = capsys.readouterr()
    assert captured.out == "hello\nworld\n"
    assert "Extracting audio" not in captured.err


def test_unknown_command_is_a_file_path(workspace, capsys):
    tmp_path, media, model_file = workspace
    assert cli.main(["--model", model_file, media]) == 0

    out_txt = tmp_path / "talk.txt"
    assert out_txt.read_bytes() == b"\xef\xbb\xbfhello\nworld\n"
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Transcription saved" in captured.err


def test_model_path_comes_from_config(workspace, capsys):
    tmp_path, media, model_file = workspace
    Path(cli.CONFIG_PATH).write_text(
        '{"default_model_path": "%s"}' % model_file, encoding="utf-8"
    )
    assert cli.main(["--stdout", media]) == 0
    assert capsys.readouterr().out == "hello\nworld\n"


def test_engine_failure_exits_nonzero(workspace, capsys):
    tmp_path, media, _model_file = workspace
    missing = str(tmp_path / "models" / "ggml-large-v3.bin")
    assert cli.main(["--model", missing, "transcribe", media]) == 1
    err = capsys.readouterr().err
    assert "error: Error loading model" in err
    assert not (tmp_path / "talk.txt").exists()


def test_missing_input_file(workspace, capsys):
    tmp_path, _media, model_file = workspace
    assert cli.main(["--model", model_file, str(tmp_path / "absent.mkv")]) == 1
    assert "input file not found" in capsys.readouterr().err


def test_malformed_config_is_fatal(workspace, capsys):
    _tmp, media, _model_file = workspace
    Path(cli.CONFIG_PATH).write_text("{", encoding="utf-8")
    assert cli.main([media]) == 1
    assert "invalid config file" in capsys.readouterr().err


def test_undecodable_config_is_fatal(workspace, capsys):
    _tmp, media, _model_file = workspace
    Path(cli.CONFIG_PATH).write_bytes(b'\xff\xfe{"default_model_path": "x"}')
    assert cli.main([media]) == 1
    assert "error: invalid config file" in capsys.readouterr().err


def test_interrupt_exits_cleanly(workspace, monkeypatch, capsys):
    _tmp, media, model_file = workspace

    def interrupted(path, logger):
        raise KeyboardInterrupt

    monkeypatch.setattr(transcriber, "load_media_samples", interrupted)
    assert cli.main(["--model", model_file, media]) == 130
    assert "interrupted" in capsys.readouterr().err
