from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    transition_table_path: str | None = None  # JSON {status: [next statuses]}; unset = built-in table
    allow_same_status: bool = True  # current == requested is accepted as a no-op
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
