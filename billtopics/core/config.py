# billtopics/core/config.py

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    DATA_DIR: str = str(PACKAGE_DIR / "data")
    OUTPUT_DIR: str = "output"
    PIPELINE_CONFIG: str = str(PACKAGE_DIR / "config.yaml")

    RANDOM_STATE: int = 42
    N_JOBS: int = 1  # workers for the cross-validated sweep

    model_config = SettingsConfigDict(
        env_prefix="BILLTOPICS_",
        env_file=None,
        env_file_encoding="utf-8",
    )


settings = Settings()
