import json
import logging
import os
from dataclasses import asdict, dataclass

from .catalog import model_path
from .config import CONFIG_PATH, DEFAULT_MODEL_NAME, MODELS_DIR
from .errors import ConfigError


@dataclass
class UserConfig:
    default_model_path: str


def default_config(models_dir: str = MODELS_DIR) -> UserConfig:
    return UserConfig(default_model_path=model_path(DEFAULT_MODEL_NAME, models_dir))


def load_config(path: str = CONFIG_PATH, models_dir: str = MODELS_DIR) -> UserConfig:
    """Read the saved config, or an unsaved default when the file is missing."""
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except FileNotFoundError:
        return default_config(models_dir)

    try:
        data = json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"invalid config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"invalid config file {path}: expected a JSON object")

    model = data.get("default_model_path")
    if model is None or model == "":
        model = default_config(models_dir).default_model_path
    if not isinstance(model, str):
        raise ConfigError(f"invalid config file {path}: default_model_path must be a string")
    return UserConfig(default_model_path=model)


def save_config(config: UserConfig, path: str = CONFIG_PATH) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(config), f, indent=2)
        f.write("\n")


def ensure_config(
    logger: logging.Logger, path: str = CONFIG_PATH, models_dir: str = MODELS_DIR
) -> UserConfig:
    if os.path.exists(path):
        return load_config(path, models_dir)
    logger.info("No config file found. Creating one with default settings.")
    config = default_config(models_dir)
    save_config(config, path)
    return config
