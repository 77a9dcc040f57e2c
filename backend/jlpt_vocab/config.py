from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "JLPT Vocab Base"
    environment: str = "dev"

    database_url: str = "sqlite:///./jlpt_vocab.db"

    # Row cap per request when reading the whole table
    page_size: int = 1000

    # Words per existence-check / insert request during bulk import
    bulk_batch_size: int = 500

    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
