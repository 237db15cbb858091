"""Reader settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "WARNING"

    # Paragraph style assumed when a paragraph names none
    default_paragraph_style: str = "Normal"
    # Longest basedOn chain followed before giving up
    max_style_depth: int = 64

    model_config = SettingsConfigDict(env_prefix="DOCXREADER_", env_file=".env", extra="ignore")


settings = Settings()
