"""Restaurant Client Configuration"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Restaurant Menu"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Restaurant API
    menu_url: str = "https://apis2.ccbp.in/restaurant-app/restaurant-menu-list-details"
    login_url: str = "https://apis.ccbp.in/login"
    http_timeout: float = 30.0

    # Session token
    token_cookie_name: str = "jwt_token"
    token_expiry_days: int = 30

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def token_max_age_seconds(self) -> int:
        """Cookie max-age for the session token"""
        return self.token_expiry_days * 24 * 3600


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
