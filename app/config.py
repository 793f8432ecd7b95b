from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./pitstop.sqlite3"
    db_pool_size: int = 2
    db_max_overflow: int = 3
    db_pool_timeout: int = 5  # seconds to wait for a free connection
    db_pool_recycle: int = 1800

    secret_key: str = "change-me-in-production"
    token_algorithm: str = "HS256"
    token_expire_minutes: int = 30 * 24 * 60  # 30 days
    bcrypt_rounds: int = 12

    api_prefix: str = "/api/v1"
    page_size: int = 10
    view_cache_size: int = 256
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    seed_demo_user: bool = True
    demo_user_email: str = "admin@pitstop.com"
    demo_user_password: str = "Admin123!"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
