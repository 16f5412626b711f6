"""Configuration for planisphere."""

import os
from pathlib import Path
from typing import Literal

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from planisphere.constants import EVENTS_FILENAME


class PlanisphereConfig(BaseModel):
    """Application configuration with Pydantic validation."""

    # Storage
    data_dir: Path = Field(default=Path("data"))
    events_filename: str = Field(default=EVENTS_FILENAME)
    store_backend: Literal["file", "memory"] = Field(default="file")

    # Identity used for write attribution
    user_id: str | None = None

    # Export
    export_dir: Path = Field(default=Path("exports"))

    # Logging
    log_dir: Path = Field(default=Path("logs"))
    log_filename: str = Field(default="planisphere.log")

    # Seconds a synchronous caller waits on the session loop
    request_timeout: float = Field(default=10.0, gt=0)

    @property
    def events_path(self) -> Path:
        """Path to the offline events file."""
        return self.data_dir / self.events_filename

    @classmethod
    def from_env(cls) -> "PlanisphereConfig":
        """Load configuration from environment variables and .env file."""
        load_dotenv(find_dotenv(usecwd=True))

        config_dict = {}

        # Storage
        if "PLANISPHERE_DATA_DIR" in os.environ:
            config_dict["data_dir"] = Path(os.environ["PLANISPHERE_DATA_DIR"])
        if "PLANISPHERE_EVENTS_FILENAME" in os.environ:
            config_dict["events_filename"] = os.environ["PLANISPHERE_EVENTS_FILENAME"]
        if os.environ.get("PLANISPHERE_STORE") in ("file", "memory"):
            config_dict["store_backend"] = os.environ["PLANISPHERE_STORE"]

        if os.environ.get("PLANISPHERE_USER"):
            config_dict["user_id"] = os.environ["PLANISPHERE_USER"]

        if "PLANISPHERE_EXPORT_DIR" in os.environ:
            config_dict["export_dir"] = Path(os.environ["PLANISPHERE_EXPORT_DIR"])

        # Logging
        if "LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["LOG_DIR"])
        if "LOG_FILENAME" in os.environ:
            config_dict["log_filename"] = os.environ["LOG_FILENAME"]

        if "PLANISPHERE_REQUEST_TIMEOUT" in os.environ:
            try:
                timeout = float(os.environ["PLANISPHERE_REQUEST_TIMEOUT"])
                if timeout > 0:
                    config_dict["request_timeout"] = timeout
            except ValueError:
                pass  # Keep default if invalid

        return cls(**config_dict)
