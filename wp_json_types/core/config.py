"""
Application configuration via pydantic-settings.

Loads values from environment variables (prefixed ``WP_TYPES_``) or a .env
file, with defaults matching a local WordPress development install.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """wp-json-types settings loaded from environment / .env file.

    Attributes:
        base_url: Root of the REST API (the ``/wp-json`` index).
        namespace: REST namespace whose routes are turned into declarations.
        output_dir: Output root; deleted and recreated on every run.
        error_log_path: JSON-lines file recording degenerate generator output.
        generator_cmd: Command line of the external schema-to-declaration CLI.
    """

    model_config = SettingsConfigDict(
        env_prefix="WP_TYPES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- REST API ---
    base_url: str = "http://localhost:8080/wp-json"
    namespace: str = "/wp/v2"
    http_timeout: float = 30.0  # Seconds per request
    fetch_attempts: int = 1  # 1 = no retry on transient transport errors

    # Routes containing any of these substrings are skipped
    excluded_route_terms: list[str] = ["search", "directory"]

    # --- Generation ---
    generator_cmd: str = "npx dtsgen"
    module_name: str = "wp-json-types"  # declare module '<module_name>' { ... }

    # --- Output ---
    output_dir: str = "dist"
    error_log_path: str = "error.log"  # Kept outside output_dir so resets don't erase it
    sort_files: bool = True  # Sort per-context files when bundling

    # --- Application ---
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Returns:
        Settings: The process-wide configuration object.
    """
    return Settings()
