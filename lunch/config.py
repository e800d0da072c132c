from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration using pydantic-settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    # Fetch target
    lunch_url: str = Field(
        default="https://www.aland.com/lunch",
        description="Page listing today's lunch menus",
    )

    # Rendering
    browser_type: str = Field(
        default="chromium",
        pattern="^(chromium|firefox|webkit)$",
        description="Playwright browser engine",
    )
    headless: bool = Field(default=True, description="Run the browser headless")
    user_agent: str = Field(
        default="Mozilla/5.0 (compatible; AlandLunch/1.0)",
        description="User-Agent sent with the page request",
    )
    render_timeout_ms: int = Field(
        default=30_000,
        ge=1_000,
        description="Upper bound for a whole scrape (navigation + settle + extraction)",
    )
    settle_delay_ms: int = Field(
        default=2_000,
        ge=0,
        description="Grace period after page load for client-side rendering",
    )

    # Storage
    cache_dir: str = Field(
        default="data", description="Directory for the cache and visibility files"
    )

    # Application
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def render_timeout(self) -> float:
        """Scrape timeout in seconds."""
        return self.render_timeout_ms / 1000

    @property
    def settle_delay(self) -> float:
        """Settle delay in seconds."""
        return self.settle_delay_ms / 1000


# Global settings instance
settings = Settings()
