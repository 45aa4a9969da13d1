import io
import os
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from whispcli.model import Segment
from whispcli.output import transcript_path, write_transcript_file, write_transcript_stream


def test_transcript_path_next_to_input():
    assert transcript_path(os.path.join("media", "talk.final.mp4")) == os.path.join(
        "media", "talk.final.txt"
    )
    assert transcript_path("clip.wav") == "clip.txt"


def test_file_has_bom_and_one_line_per_segment(tmp_path):
    path = tmp_path / "talk.txt"
    path.write_text("stale content that must go away\n", encoding="utf-8")

    count = write_transcript_file([Segment(" Hello."), Segment(" こんにちは")], str(path))

    raw = path.read_bytes()
    assert count == 2
    assert raw.startswith(b"\xef\xbb\xbf")
    assert raw[3:].decode("utf-8") == " Hello.\n こんにちは\n"


def test_empty_transcript_still_has_bom(tmp_path):
    path = tmp_path / "silence.txt"
    write_transcript_file([], str(path))
    assert path.read_bytes() == b"\xef\xbb\xbf"


def test_stream_has_no_bom():
    buf = io.StringIO()
    write_transcript_stream([Segment("hello"), Segment("world")], buf)
    assert buf.getvalue() == "hello\nworld\n"
