from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ShellConfig(BaseModel):
    """Launcher settings. Built from launcher arguments only."""

    # UI entry page, relative to the working directory
    html_path: Optional[Union[Path, str]] = None

    # WebSocket command channel
    host: str = "127.0.0.1"
    port: int = Field(default=9000, ge=1, le=65535)

    log_level: LogLevel = "INFO"

    # Seconds to wait for the webframe process before terminating it
    webframe_close_timeout: float = Field(default=3.0, gt=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value
