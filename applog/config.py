"""
Logger configuration — reads from environment variables.

Uses pydantic-settings so the same variables can come from the process
environment or a local .env file. Nothing here is required: every field has
a default, and a level label that is not recognized falls back to notice.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from applog.levels import DEFAULT_LEVEL, Level, to_level


class LogSettings(BaseSettings):
    """Environment-driven settings for setup_logger() / get_logger()."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # the host application's own vars share the .env
    )

    # ── Records ──────────────────────────────────────────
    # Minimum level by name, case-insensitive. Unknown → notice.
    log_level: str = DEFAULT_LEVEL.label

    # ── Remote sink ──────────────────────────────────────
    # Empty disables the POST copy; records still go to stdout.
    log_remote_url: str = ""
    log_remote_timeout: float = 3.0

    # ── Failure policy ───────────────────────────────────
    # true → formatting/serialization/sink errors and unknown level
    # labels raise instead of being absorbed.
    log_strict: bool = False

    # ── Diagnostics channel (stdlib 'applog' logger on stderr) ─
    log_diagnostics_level: str = "WARNING"

    def resolved_level(self) -> Level:
        """The threshold named by log_level (fallback notice)."""
        return to_level(self.log_level, strict=self.log_strict)


def get_settings() -> LogSettings:
    """Create and return the settings instance.

    Raises:
        ValidationError: If a variable is present but malformed
            (e.g. LOG_REMOTE_TIMEOUT=soon).
    """
    return LogSettings()
