import logging
import os
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Dict, List, Optional

import requests
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

from .config import DOWNLOAD_CHUNK_BYTES, DOWNLOAD_TIMEOUT_S, MODELS_DIR
from .errors import DownloadError

MODEL_NAMES = (
    "tiny.en",
    "base.en",
    "small.en",
    "small.en-tdrz",
    "medium.en",
    "large-v3",
    "large-v3-q5_0",
    "large-v3-kotoba.ja_JP",
)

DEFAULT_URL_TEMPLATE = "https://huggingface.co/ggerganov/whisper.cpp/resolve/main/ggml-{name}.bin"
URL_OVERRIDES: Dict[str, str] = {
    "small.en-tdrz": "https://huggingface.co/akashmjn/tinydiarize-whisper.cpp/resolve/main/ggml-small.en-tdrz.bin",
    "large-v3-kotoba.ja_JP": "https://huggingface.co/kotoba-tech/kotoba-whisper-v1.0-ggml/resolve/main/ggml-kotoba-whisper-v1.0.bin",
}


@dataclass(frozen=True)
class ModelDescriptor:
    name: str
    url: str
    path: str

    @property
    def downloaded(self) -> bool:
        return os.path.exists(self.path)


def model_url(name: str) -> str:
    return URL_OVERRIDES.get(name, DEFAULT_URL_TEMPLATE.format(name=name))


def model_path(name: str, models_dir: str = MODELS_DIR) -> str:
    return os.path.join(models_dir, f"ggml-{name}.bin")


def describe(name: str, models_dir: str = MODELS_DIR) -> ModelDescriptor:
    return ModelDescriptor(name=name, url=model_url(name), path=model_path(name, models_dir))


def catalog(models_dir: str = MODELS_DIR) -> List[ModelDescriptor]:
    return [describe(name, models_dir) for name in MODEL_NAMES]


def _maybe_progress(enabled: bool):
    """Return (context, progress) where progress is None when disabled."""
    if not enabled:
        return nullcontext(), None
    progress = Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        DownloadColumn(),
        TransferSpeedColumn(),
        TimeRemainingColumn(),
    )
    return progress, progress


def download_file(
    url: str,
    dest: str,
    session: Optional[requests.Session] = None,
    show_progress: bool = True,
) -> None:
    """Stream ``url`` into ``dest``, reporting bytes as they arrive."""
    if session is None:
        with requests.Session() as http:
            _stream_to_file(http, url, dest, show_progress)
    else:
        _stream_to_file(session, url, dest, show_progress)


def _content_length(headers) -> Optional[int]:
    try:
        total = int(headers.get("Content-Length", 0))
    except (TypeError, ValueError):
        return None
    return total if total > 0 else None


def _stream_to_file(http: requests.Session, url: str, dest: str, show_progress: bool) -> None:
    with http.get(url, stream=True, timeout=DOWNLOAD_TIMEOUT_S) as resp:
        if resp.status_code != 200:
            raise DownloadError(f"bad status: {resp.status_code} {resp.reason}")
        total = _content_length(resp.headers)
        progress_ctx, progress = _maybe_progress(show_progress)
        with progress_ctx, open(dest, "wb") as f:
            task = None
            if progress is not None:
                task = progress.add_task(f"Downloading {os.path.basename(dest)}", total=total)
            for chunk in resp.iter_content(chunk_size=DOWNLOAD_CHUNK_BYTES):
                if not chunk:
                    continue
                f.write(chunk)
                if progress is not None:
                    progress.update(task, advance=len(chunk))


def _remove_partial(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


def download_model(
    model: ModelDescriptor,
    logger: logging.Logger,
    session: Optional[requests.Session] = None,
    show_progress: bool = True,
) -> bool:
    """Download ``model`` unless present. Returns True only when a file was fetched.

    Transfer failures are logged and contained here: the partial file is removed
    and False is returned, so an interactive session can carry on.
    """
    if os.path.exists(model.path):
        logger.info(f"Model {model.name} already exists at {model.path}. Skipping download.")
        return False

    try:
        os.makedirs(os.path.dirname(model.path) or ".", exist_ok=True)
    except OSError as e:
        logger.error(f"Error creating destination directory: {e}")
        return False

    logger.info(f"Downloading from: {model.url}")
    logger.info(f"Saving to: {model.path}")
    try:
        download_file(model.url, model.path, session=session, show_progress=show_progress)
    except KeyboardInterrupt:
        _remove_partial(model.path)
        raise
    except (requests.RequestException, DownloadError, OSError) as e:
        _remove_partial(model.path)
        logger.error(f"Error downloading model {model.name}: {e}")
        return False
    logger.info(f"✅ Download of {model.name} complete")
    return True
