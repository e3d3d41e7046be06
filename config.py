"""Application configuration."""
import os
from dataclasses import dataclass


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class GiveItConfig:
    """give.it SDK configuration."""

    data_key: str = ""  # Read from GIVEIT_DATA_KEY
    button_type: str = "blue_rect_sm"
    render_errors: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "GiveItConfig":
        """Load config from environment variables."""
        return cls(
            data_key=os.getenv("GIVEIT_DATA_KEY", ""),
            button_type=os.getenv("GIVEIT_BUTTON_TYPE", "blue_rect_sm"),
            render_errors=_env_flag("GIVEIT_RENDER_ERRORS"),
            log_level=os.getenv("GIVEIT_LOG_LEVEL", "WARNING").upper(),
        )


# Global instance
app_config = GiveItConfig.from_env()
