from typing import Literal
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: Literal["development", "testing", "production"] = "development"
    DEBUG: bool = False

    # Project
    PROJECT_NAME: str = "pagestream"
    VERSION: str = "0.1.0"

    # API
    API_V1_STR: str = "/api/v1"

    # Remote page source
    API_BASE_URL: str = "http://127.0.0.1:8000"
    OFFSET_ENDPOINT: str = "/api/v1/items"
    PAGE_NUMBER_ENDPOINT: str = "/api/v1/pages"
    REQUEST_TIMEOUT: float = 10.0

    # Pagination
    PAGINATION_MODE: Literal["offset", "page"] = "offset"
    PAGE_SIZE: int = Field(default=10, gt=0)
    START_INDEX: int = Field(default=0, ge=0)

    # In-process mock server
    USE_MOCK_SERVER: bool = True
    MOCK_TOTAL_ITEMS: int = Field(default=81, ge=0)
    MOCK_MIN_LATENCY: float = Field(default=0.5, ge=0)
    MOCK_MAX_LATENCY: float = Field(default=2.0, ge=0)

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/pagestream.log"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    class Config:
        env_file = ".env"
        case_sensitive = True

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        # Environment-specific configurations
        if self.ENVIRONMENT == "development":
            self.DEBUG = True
            self.LOG_LEVEL = "DEBUG"

        elif self.ENVIRONMENT == "testing":
            self.DEBUG = True
            self.LOG_LEVEL = "ERROR"  # Reduce test noise
            self.MOCK_MIN_LATENCY = 0.0
            self.MOCK_MAX_LATENCY = 0.0

        elif self.ENVIRONMENT == "production":
            self.DEBUG = False
            self.LOG_LEVEL = "WARNING"

    @model_validator(mode="after")
    def check_latency_range(self) -> "Settings":
        if self.MOCK_MIN_LATENCY > self.MOCK_MAX_LATENCY:
            raise ValueError("MOCK_MIN_LATENCY must not exceed MOCK_MAX_LATENCY")
        return self

    @property
    def items_endpoint(self) -> str:
        """Endpoint matching the configured pagination mode"""
        if self.PAGINATION_MODE == "page":
            return self.PAGE_NUMBER_ENDPOINT
        return self.OFFSET_ENDPOINT

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_testing(self) -> bool:
        return self.ENVIRONMENT == "testing"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
