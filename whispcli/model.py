import logging
import os
from dataclasses import dataclass
from typing import Iterator, List, Optional

import numpy as np
from pywhispercpp.model import Model

from .capture import OutputCapture
from .config import N_THREADS
from .errors import (
    ContextError,
    EngineError,
    InferenceError,
    ModelLoadError,
    SegmentError,
)

DEFAULT_LANGUAGE = "en"
# kotoba-whisper is a Japanese fine-tune; nothing else in the catalog is
JAPANESE_MODEL_MARKER = "kotoba"


@dataclass(frozen=True)
class Segment:
    text: str


def detect_language(model_path: str) -> str:
    if JAPANESE_MODEL_MARKER in os.path.basename(model_path):
        return "ja"
    return DEFAULT_LANGUAGE


def load_model(model_path: str, n_threads: int = N_THREADS) -> Model:
    # pywhispercpp treats anything that is not a file as a model name to fetch
    if not os.path.isfile(model_path):
        raise ModelLoadError(f"model file not found: {model_path}")
    try:
        return Model(
            model_path,
            n_threads=n_threads,
            print_progress=False,
            print_realtime=False,
            print_timestamps=False,
        )
    except Exception as e:
        raise ModelLoadError(str(e) or type(e).__name__) from e


class RecognitionContext:
    """One inference run over a loaded model."""

    def __init__(self, model: Model, params: dict):
        self._model = model
        self.params = params
        self.language = DEFAULT_LANGUAGE
        self._results: Optional[List] = None

    def set_language(self, language: str) -> None:
        self.language = language

    def process(self, samples: np.ndarray) -> None:
        try:
            results = self._model.transcribe(samples, language=self.language)
        except Exception as e:
            raise InferenceError(str(e) or type(e).__name__) from e
        self._results = list(results)

    def segments(self) -> Iterator[Segment]:
        """Segments in production order; exhausting the iterator is the end marker."""
        if self._results is None:
            raise InferenceError("segments requested before process()")
        return self._iter_segments(self._results)

    @staticmethod
    def _iter_segments(results: List) -> Iterator[Segment]:
        for idx, raw in enumerate(results):
            try:
                text = raw.text
            except AttributeError as e:
                raise SegmentError(f"segment {idx} has no text") from e
            if isinstance(text, bytes):
                text = text.decode("utf-8", errors="replace")
            yield Segment(text=text)


def new_context(model: Model) -> RecognitionContext:
    try:
        params = dict(model.get_params())
    except Exception as e:
        raise ContextError(str(e) or type(e).__name__) from e
    return RecognitionContext(model, params)


def run_inference(
    model_path: str,
    samples: np.ndarray,
    language: str,
    logger: logging.Logger,
    n_threads: int = N_THREADS,
) -> RecognitionContext:
    """Load, configure and run the engine with its console output captured."""
    capture = OutputCapture()
    try:
        with capture:
            model = load_model(model_path, n_threads)
            ctx = new_context(model)
            ctx.set_language(language)
            ctx.process(samples)
    except EngineError as e:
        e.native_output = capture.output
        raise
    if capture.output and logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"whisper.cpp output:\n{capture.output.rstrip()}")
    return ctx
