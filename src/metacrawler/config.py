"""Configuration using pydantic-settings."""

from pydantic_settings import BaseSettings

DEFAULT_USER_AGENT = "metacrawler/0.1 (+https://github.com/metacrawler)"


class CrawlerSettings(BaseSettings):
    """Crawler configuration."""

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    max_connections: int = 100
    max_keepalive_connections: int = 20
    follow_redirects: bool = True
    log_level: str = "WARNING"

    model_config = {"env_prefix": "METACRAWLER_"}


settings = CrawlerSettings()
