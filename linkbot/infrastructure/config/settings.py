"""Application settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from linkbot.infrastructure.config.sponsor_links import parse_sponsor_links


class Settings(BaseSettings):
    """Application configuration settings."""

    debug_mode: bool = False
    bot_token: str = ""  # Bot is disabled when empty
    port: int = 3001
    repository_backend: str = "postgres"  # postgres or in_memory
    database_url: str = ""  # Persistence is disabled (degraded mode) when empty
    public_base_url: str = "https://borkstudio"
    bot_owner_id: int = 6910097562
    sponsor_links: str = ""  # Comma or URL delimited list of https://t.me/ links

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore",
        frozen=True,
    )

    @property
    def bot_enabled(self) -> bool:
        """Check if the Telegram bot can be started."""
        return bool(self.bot_token)

    @property
    def persistence_enabled(self) -> bool:
        """Check if any durable or in-process storage is configured."""
        return self.repository_backend == "in_memory" or bool(self.database_url)

    @property
    def sponsor_link_list(self) -> list[str]:
        """Parsed, de-duplicated sponsor links."""
        return parse_sponsor_links(self.sponsor_links)

