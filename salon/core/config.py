from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BUSINESS_NAME: str = "Divas AyA"
    BUSINESS_TIMEZONE: str = "Europe/Madrid"

    STORE_PROVIDER: str = "memory"  # "memory", "json", "firestore"
    STORE_DATA_FILE: str = "./data/salon.json"
    STORE_TIMEOUT_SECONDS: float = 10.0
    STORE_MAX_ATTEMPTS: int = 3
    STORE_RETRY_BACKOFF_SECONDS: float = 0.2
    FIRESTORE_PROJECT: str | None = None

    SUGGESTION_PROVIDER: str = "local"  # "local", "openai"
    SUGGESTION_LIMIT: int = 5
    SLOT_STEP_MINUTES: int = 15

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL_SUGGEST: str = "gpt-4o-mini"
    OPENAI_MODEL_MARKETING: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE_SUGGEST: float = 0.0
    OPENAI_TEMPERATURE_MARKETING: float = 0.7
    OPENAI_TIMEOUT_SECONDS: float = 30.0

    JWT_SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60


settings = Settings()
