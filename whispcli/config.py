import os

VERSION = "0.3.0"

# Paths
CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".config")
CONFIG_PATH = os.getenv("WHISPCLI_CONFIG", os.path.join(CONFIG_DIR, "whispcli.json"))
MODELS_DIR = os.getenv("WHISPCLI_MODELS_DIR", os.path.join(CONFIG_DIR, "whisper-cpp", "models"))
DEFAULT_MODEL_NAME = os.getenv("WHISPCLI_DEFAULT_MODEL", "base.en")

# External tools
VLC_BIN = os.getenv("VLC_BIN", "vlc")
FFMPEG_BIN = os.getenv("FFMPEG_BIN", "ffmpeg")

# Audio
SAMPLE_RATE = int(os.getenv("SAMPLE_RATE", "16000"))
CHANNELS = int(os.getenv("CHANNELS", "1"))

# Transcription
N_THREADS = int(os.getenv("WHISPER_THREADS", str(min(4, os.cpu_count() or 1))))

# Download
DOWNLOAD_CHUNK_BYTES = int(os.getenv("DOWNLOAD_CHUNK_BYTES", str(1 << 16)))
DOWNLOAD_TIMEOUT_S = float(os.getenv("DOWNLOAD_TIMEOUT_S", "30"))
