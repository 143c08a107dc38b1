from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"

    llm_provider: str = "gemini"
    llm_model: str = "gemini-2.0-flash"
    gemini_api_key: str = ""
    gemini_api_url: str = ""
    llm_temperature: float = 0.3
    llm_top_k: int = 32
    llm_top_p: float = 0.8
    llm_max_output_tokens: int = 4096
    llm_timeout_seconds: float = 20.0
    llm_max_retries: int = 3

    chat_history_max_turns: int = 20

    sandbox_timeout_seconds: float = 5.0
    sandbox_max_output_chars: int = 20000

    runtime_data_dir: str = "data/devmentor"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
