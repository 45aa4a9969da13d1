"""Exceptions raised across whispcli.

Everything the command path treats as fatal derives from ``WhispcliError`` so
the CLI can report it with a single handler.
"""

from typing import Optional


class WhispcliError(Exception):
    pass


class ToolNotFoundError(WhispcliError):
    """A required executable is not on PATH."""


class ExternalToolError(WhispcliError):
    """An external process exited with a failure status."""

    def __init__(self, tool: str, returncode: Optional[int], stderr: str, detail: str = ""):
        self.tool = tool
        self.returncode = returncode
        self.stderr = stderr
        message = detail or f"{tool} execution failed: exit status {returncode}"
        if stderr:
            message = f"{message}\n{tool} stderr: {stderr}"
        super().__init__(message)


class PCMFormatError(WhispcliError):
    pass


class EmptyPCMError(PCMFormatError):
    pass


class OddPCMLengthError(PCMFormatError):
    pass


class EngineError(WhispcliError):
    """Failure inside the speech engine.

    ``native_output`` is whatever the engine wrote to the process stdout/stderr
    while it ran; it is filled in after the output capture is released.
    """

    stage = "running the speech engine"

    def __init__(self, message: str, native_output: str = ""):
        super().__init__(message)
        self.message = message
        self.native_output = native_output

    def __str__(self) -> str:
        text = f"Error {self.stage}: {self.message}"
        if self.native_output:
            text += f"\n--- native output ---\n{self.native_output.rstrip()}\n---------------------"
        return text


class ModelLoadError(EngineError):
    stage = "loading model"


class ContextError(EngineError):
    stage = "creating context"


class InferenceError(EngineError):
    stage = "during transcription"


class SegmentError(EngineError):
    stage = "reading segment"


class ConfigError(WhispcliError):
    pass


class DownloadError(WhispcliError):
    pass
