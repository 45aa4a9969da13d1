"""Interactive ``setup`` command: download models and pick the default one.

Ctrl+C in any prompt goes back one level; at the main menu it leaves setup.
"""

import logging
from typing import Any, List, Optional

from InquirerPy import inquirer
from InquirerPy.base.control import Choice
from rich.console import Console

from .catalog import ModelDescriptor, catalog, download_model
from .config import CONFIG_PATH, MODELS_DIR
from .settings import ensure_config, load_config, save_config

BACK = "__back__"
MAIN_DOWNLOAD = "Download models"
MAIN_SELECT_DEFAULT = "Select default model"
MAIN_EXIT = "Exit"

console = Console()


def _select(message: str, choices: List[Any]) -> Optional[Any]:
    try:
        return inquirer.select(message=message, choices=choices, max_height=10).execute()
    except KeyboardInterrupt:
        return None


def _pause() -> None:
    try:
        console.input("\nPress Enter to return to the menu...")
    except (KeyboardInterrupt, EOFError):
        pass


def _clear_screen() -> None:
    console.clear()


def _model_choice(model: ModelDescriptor, marker: str) -> Choice:
    name = f"{model.name} ({marker})" if marker else model.name
    return Choice(value=model, name=name)


def _back_choice() -> Choice:
    return Choice(value=BACK, name="Back to main menu")


def perform_download(model: ModelDescriptor, logger: logging.Logger) -> bool:
    _clear_screen()
    console.print(f"Preparing to download: {model.name}\n")
    try:
        ok = download_model(model, logger)
    except KeyboardInterrupt:
        console.print("\nDownload cancelled.")
        ok = False
    _pause()
    return ok


def download_models_menu(logger: logging.Logger, models_dir: str = MODELS_DIR) -> None:
    while True:
        _clear_screen()
        choices = [
            _model_choice(m, "downloaded" if m.downloaded else "") for m in catalog(models_dir)
        ]
        choices.append(_back_choice())
        picked = _select("Model Download Menu", choices)
        if picked is None or picked == BACK:
            return
        perform_download(picked, logger)


def select_default_menu(
    logger: logging.Logger, config_path: str = CONFIG_PATH, models_dir: str = MODELS_DIR
) -> None:
    config = load_config(config_path, models_dir)
    models = catalog(models_dir)
    choices = [
        _model_choice(m, "current" if m.path == config.default_model_path else "") for m in models
    ]
    choices.append(_back_choice())

    picked = _select("Select default model", choices)
    if picked is None or picked == BACK:
        return

    if picked.path == config.default_model_path:
        console.print("\nThis is already the default model.")
        _pause()
        return

    config.default_model_path = picked.path
    save_config(config, config_path)
    logger.info(f"✅ Default model path updated to: {picked.path}")

    if not picked.downloaded:
        logger.info(f"Model '{picked.name}' is not downloaded. Starting download...")
        perform_download(picked, logger)
    else:
        _pause()


def run_setup(
    logger: logging.Logger, config_path: str = CONFIG_PATH, models_dir: str = MODELS_DIR
) -> None:
    ensure_config(logger, config_path, models_dir)
    while True:
        _clear_screen()
        picked = _select(
            "whispcli setup menu", [MAIN_DOWNLOAD, MAIN_SELECT_DEFAULT, MAIN_EXIT]
        )
        if picked is None or picked == MAIN_EXIT:
            console.print("Exiting setup.")
            return
        if picked == MAIN_DOWNLOAD:
            download_models_menu(logger, models_dir)
        elif picked == MAIN_SELECT_DEFAULT:
            select_default_menu(logger, config_path, models_dir)
