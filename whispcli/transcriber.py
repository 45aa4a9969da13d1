import logging
import os
import sys
from typing import Optional, TextIO

from .audio import load_media_samples
from .config import N_THREADS
from .model import detect_language, run_inference
from .output import transcript_path, write_transcript_file, write_transcript_stream


class FileTranscriber:
    """Runs one media file through extraction, whisper.cpp and the output sink."""

    def __init__(
        self,
        model_path: str,
        logger: logging.Logger,
        to_stdout: bool = False,
        stdout: Optional[TextIO] = None,
        n_threads: int = N_THREADS,
    ):
        self.model_path = model_path
        self.logger = logger
        self.to_stdout = to_stdout
        self.stdout = stdout
        self.n_threads = n_threads

    def run_file(self, file_path: str) -> Optional[str]:
        """Transcribe ``file_path``. Returns the transcript path in file mode."""
        logger = self.logger
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"input file not found: {file_path}")
        logger.info("Extracting audio...")
        samples = load_media_samples(file_path, logger)

        language = detect_language(self.model_path)
        if language == "ja":
            logger.info("Japanese model detected, setting language to 'ja'.")

        logger.info(f"Loading model {self.model_path}...")
        logger.info("Transcribing...")
        ctx = run_inference(self.model_path, samples, language, logger, self.n_threads)

        if self.to_stdout:
            stream = self.stdout if self.stdout is not None else sys.stdout
            count = write_transcript_stream(ctx.segments(), stream)
            logger.debug(f"Wrote {count} segment(s) to stdout")
            return None

        out_txt = transcript_path(file_path)
        count = write_transcript_file(ctx.segments(), out_txt)
        logger.info(f"✅ Transcription saved to {out_txt} ({count} segment(s))")
        return out_txt
