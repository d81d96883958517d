"""Signal tower configuration."""

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Verbosity for channels created without an explicit level
    default_log_level: int = 0
    # Applied to every channel when the tower is initialized (None = keep originals)
    global_log_level: int | None = None

    # Number of subscriber faults kept for diagnostics
    fault_history: int = 100

    # Create the catalog channels when the process-wide tower is first built
    register_default_channels: bool = True

    # Used by configure_logging()
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    model_config = SettingsConfigDict(env_prefix="SIGNAL_TOWER_")


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging for applications embedding the tower."""
    settings = settings or Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format=settings.log_format,
    )
