from pathlib import Path

from pydantic_settings import BaseSettings

ROOT_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    app_name: str = "Yuna AI Chat"
    debug: bool = False

    # Paths
    data_dir: Path = ROOT_DIR / "data"
    db_path: Path = ROOT_DIR / "yuna.db"

    # LLM
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"

    # Client
    server_url: str = "http://localhost:3000"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    model_config = {
        "env_file": str(ROOT_DIR / ".env"),
        "env_prefix": "YUNA_",
    }


settings = Settings()
