from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.home() / ".vocaboost" / "data"
    sqlite_filename: str = "vocaboost.db"
    quick_save_deck_name: str = "Quick Saves"
    default_deck_name: str = "Untitled List"
    cors_origins: list[str] = ["*"]

    model_config = {"env_prefix": "VOCABOOST_"}


settings = Settings()
