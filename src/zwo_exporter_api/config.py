"""Configuration settings for the ZWO exporter API."""
import os
from typing import List, Literal


EnvironmentType = Literal["development", "staging", "production"]

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:3001"


class Settings:
    """Application settings."""

    # Environment
    ENVIRONMENT: EnvironmentType = "development"
    LOG_LEVEL: str = "INFO"

    # ZWO document defaults
    ZWO_AUTHOR: str = "WhatsOnZwift Exporter"
    DEFAULT_WORKOUT_NAME: str = "Zwift Workout"
    DESCRIPTION_PREFIX: str = "Workout exported from WhatsOnZwift: "

    # HTTP
    CORS_ORIGINS: List[str] = []

    def __init__(self):
        # Environment
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

        # ZWO document defaults
        self.ZWO_AUTHOR = os.getenv("ZWO_AUTHOR", self.ZWO_AUTHOR)
        self.DEFAULT_WORKOUT_NAME = os.getenv("DEFAULT_WORKOUT_NAME", self.DEFAULT_WORKOUT_NAME)
        self.DESCRIPTION_PREFIX = os.getenv("DESCRIPTION_PREFIX", self.DESCRIPTION_PREFIX)

        # HTTP
        origins = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
        self.CORS_ORIGINS = [o.strip() for o in origins.split(",") if o.strip()]


settings = Settings()
