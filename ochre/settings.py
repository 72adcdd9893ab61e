from pydantic_settings import BaseSettings, SettingsConfigDict

from ochre.util import OCHRE_URL


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="OCHRE_")

    base_url: str = OCHRE_URL
    default_language: str = "eng"
    timeout_seconds: int = 30
    connection_pool_size: int = 10
    log_level: str = "INFO"


# pydantic settings are set from the OCHRE_* env variables
settings = Settings()
