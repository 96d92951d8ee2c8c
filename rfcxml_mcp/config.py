"""Configuration settings for RFCXML MCP Server."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from . import __version__

# Valid RFC number range accepted by every tool
RFC_NUMBER_MIN = 1
RFC_NUMBER_MAX = 99999


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RFCXML_",
        env_file=".env",
        extra="ignore",
    )

    # Server
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # CORS - comma-separated list of allowed origins
    cors_allowed_origins: str = "*"

    # Upstream fetching
    http_timeout_seconds: float = 30.0
    http_user_agent: str = f"rfcxml-mcp/{__version__}"

    # Parsed RFC cache (number of documents kept in memory)
    parse_cache_size: int = 50

    # RFCs from this number on are published as RFCXML v3
    xml_available_from: int = 8650

    # Request limits
    max_json_payload_size: int = 1_048_576

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        if self.cors_allowed_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]


settings = Settings()
