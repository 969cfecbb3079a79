from pydantic import SecretStr
from pydantic_settings import BaseSettings
from typing import Optional, List

class Settings(BaseSettings):
    # Application settings
    ENV: str = "dev"

    # Upstream news API
    MEDIASTACK_ACCESS_KEY: SecretStr = SecretStr("")
    MEDIASTACK_BASE_URL: str = "https://api.mediastack.com/v1/news"
    MEDIASTACK_DOCS_URL: str = "https://mediastack.com/documentation"
    REQUEST_TIMEOUT: Optional[float] = None  # None leaves it to the transport
    USER_AGENT: str = "TransferNews/1.0"

    # Query shape
    QUERY_WINDOW_DAYS: int = 30
    RESULT_LIMIT: int = 100
    INCLUDE_SECONDARY: bool = False

    # Security
    ALLOWED_ORIGINS: str = "http://localhost:8081,http://127.0.0.1:8081"
    RATE_LIMIT_PER_MINUTE: int = 30

    @property
    def allowed_origins_list(self) -> List[str]:
        """Convert comma-separated ALLOWED_ORIGINS to list"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def access_key(self) -> str:
        return self.MEDIASTACK_ACCESS_KEY.get_secret_value()

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "prod"

settings = Settings()
