import os
from typing import Iterable, TextIO

from .model import Segment

BOM = "\ufeff"


def transcript_path(media_path: str) -> str:
    """``dir/name.ext`` -> ``dir/name.txt``"""
    base = os.path.basename(media_path)
    name, _ext = os.path.splitext(base)
    return os.path.join(os.path.dirname(media_path), name + ".txt")


def write_transcript_file(segments: Iterable[Segment], path: str) -> int:
    count = 0
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(BOM)
        for seg in segments:
            f.write(seg.text + "\n")
            count += 1
    return count


def write_transcript_stream(segments: Iterable[Segment], stream: TextIO) -> int:
    count = 0
    for seg in segments:
        stream.write(seg.text + "\n")
        stream.flush()
        count += 1
    return count
