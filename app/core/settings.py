# app/core/settings.py
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # App
    APP_ENV: str = Field("dev")
    APP_TITLE: str = Field("catalog-api")
    APP_VERSION: str = Field("0.1.0")
    LOG_LEVEL: str = Field("INFO")
    CORS_ORIGINS: Optional[str] = None

    # JWT (emis de serviciul de identitate; aici doar verificăm)
    JWT_SECRET: str = Field("change-me-in-development", description="Cheia de semnare HS256")
    JWT_ALGORITHM: str = Field("HS256")
    TOKEN_EXPIRATION: str = Field("24h", description="Durata implicită: 24h | 24 hours | 30m | 7d | 3600")


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
