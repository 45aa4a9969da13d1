import logging
import os
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from typing import Iterator

import ffmpeg
import numpy as np

from .config import CHANNELS, FFMPEG_BIN, SAMPLE_RATE, VLC_BIN
from .errors import (
    EmptyPCMError,
    ExternalToolError,
    OddPCMLengthError,
    ToolNotFoundError,
)

PCM_SCALE = 32768.0


def require_tool(name: str) -> str:
    """Resolve ``name`` on PATH or fail; there is no fallback tool."""
    path = shutil.which(name)
    if path is None:
        raise ToolNotFoundError(
            f"{name} command not found, please install it and ensure it is in your PATH"
        )
    return path


@contextmanager
def scoped_temp_wav() -> Iterator[str]:
    # closed right away so the player can open it for writing
    fd, path = tempfile.mkstemp(prefix="vlc-", suffix=".wav")
    os.close(fd)
    try:
        yield path
    finally:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass


def vlc_sout(dst: str, sample_rate: int = SAMPLE_RATE, channels: int = CHANNELS) -> str:
    return (
        f"#transcode{{acodec=s16l,samplerate={sample_rate},channels={channels}}}"
        f":standard{{access=file,mux=wav,dst={dst}}}"
    )


def vlc_to_wav(player: str, input_path: str, wav_path: str) -> None:
    """Have VLC transcode the input's audio into a 16 kHz mono WAV file."""
    cmd = [
        player,
        "-I", "dummy",
        "--no-sout-video",
        input_path,
        "--sout", vlc_sout(wav_path),
        "vlc://quit",
    ]
    proc = subprocess.run(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE)
    if proc.returncode != 0:
        stderr = (proc.stderr or b"").decode("utf-8", errors="replace").strip()
        raise ExternalToolError("VLC", proc.returncode, stderr)


def wav_to_pcm(wav_path: str) -> bytes:
    """Re-read the WAV file with FFmpeg and return headerless s16le bytes."""
    stream = ffmpeg.input(wav_path).output(
        "pipe:",
        format="s16le",
        acodec="pcm_s16le",
        ac=CHANNELS,
        ar=str(SAMPLE_RATE),
    )
    try:
        out, _err = stream.run(
            cmd=FFMPEG_BIN,
            capture_stdout=True,
            capture_stderr=True,
            quiet=True,
        )
    except FileNotFoundError as e:
        raise ToolNotFoundError(
            f"{FFMPEG_BIN} command not found, please install FFmpeg and ensure it is in your PATH"
        ) from e
    except ffmpeg.Error as e:
        stderr = (e.stderr or b"").decode("utf-8", errors="replace").strip()
        raise ExternalToolError(
            "FFmpeg", None, stderr, detail="FFmpeg failed to read WAV file"
        ) from e
    return out


def decode_pcm(data: bytes) -> np.ndarray:
    """Little-endian int16 PCM -> float32 samples in [-1.0, 1.0]."""
    if len(data) == 0:
        raise EmptyPCMError("FFmpeg produced no output from WAV file")
    if len(data) % 2 != 0:
        raise OddPCMLengthError("odd PCM data length from WAV file")
    return np.frombuffer(data, dtype="<i2").astype(np.float32) / PCM_SCALE


def load_media_samples(input_path: str, logger: logging.Logger) -> np.ndarray:
    """Extract mono 16 kHz float samples from any media file VLC can play."""
    player = require_tool(VLC_BIN)
    with scoped_temp_wav() as wav_path:
        logger.debug(f"VLC transcoding {input_path} -> {wav_path}")
        vlc_to_wav(player, input_path, wav_path)
        logger.debug("Reading PCM from intermediate WAV with FFmpeg")
        data = wav_to_pcm(wav_path)
    samples = decode_pcm(data)
    logger.debug(f"Decoded {samples.shape[0]} samples ({samples.shape[0] / SAMPLE_RATE:.1f}s)")
    return samples
