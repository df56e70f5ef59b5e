from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "task-assignments"

    # ---------------------------------------------------------------------
    # API contract / OpenAPI
    # ---------------------------------------------------------------------

    api_version: str = "1.0.0"
    api_description: str = (
        "Task assignments API.\n\n"
        "The acting user is identified by the X-Actor-User-Id header. "
        "Only the owner of a task may manage its assignees; "
        "every user may select one of their assigned tasks as active."
    )

    env: str = "local"
    debug: bool = True
    log_level: str = "INFO"

    # bind address of app.serve
    host: str = "127.0.0.1"
    port: int = 8000

    db_host: str = "127.0.0.1"
    db_port: int = 5432
    db_name: str = "assignments"
    db_user: str = "assignments"
    db_password: str = "assignments"

    # e.g. "sqlite:///./assignments.db" for a local single-file setup
    database_url_override: str | None = None

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+psycopg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


settings = Settings()
