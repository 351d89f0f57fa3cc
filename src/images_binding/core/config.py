"""Runtime settings for the images binding.

Values are read from environment variables prefixed with ``IMAGES_BINDING_``,
for example ``IMAGES_BINDING_PORT=9000`` or ``IMAGES_BINDING_JPEG_QUALITY=90``.
"""

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class BindingSettings(BaseSettings):
    """Server and encoder settings."""

    model_config = SettingsConfigDict(env_prefix="IMAGES_BINDING_", extra="ignore")

    host: str = "127.0.0.1"
    port: int = Field(default=8787, ge=1, le=65535)
    log_level: str = "INFO"
    info_path: str = "/info"
    jpeg_quality: int = Field(default=80, ge=1, le=100)
    webp_quality: int = Field(default=80, ge=1, le=100)
    avif_quality: int = Field(default=50, ge=1, le=100)


def load_settings(**overrides) -> BindingSettings:
    """Build settings from the environment, applying explicit overrides."""
    try:
        return BindingSettings(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid images binding settings: {exc}") from exc
