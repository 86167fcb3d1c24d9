from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    # Ollama
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.1:8b"
    model_timeout_seconds: float = 60.0

    # Conversation
    recent_history_limit: int = 5
    serialize_user_turns: bool = False  # per-user lock around each turn

    # HTTP
    cors_allow_origins: Annotated[list[str], NoDecode] = ["*"]

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def parse_origins(cls, v: object) -> object:
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v

    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    log_file: str = "data/companion.log"

    model_config = {"env_file": ".env"}
