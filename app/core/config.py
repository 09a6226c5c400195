from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://concursos:concursos_pass@db:5432/concursos_ganaderos"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    ENVIRONMENT: str = "development"
    PORT: int = 8000

    # Tokens are issued by the external identity provider
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str | None = None
    JWT_ISSUER: str | None = None

    CORS_ORIGINS: list[str] = ["*"]
    DEFAULT_PAGE_SIZE: int = 10

    # Listing participants is open to any authenticated user unless enabled
    PARTICIPANTS_LIST_REQUIRES_MANAGE: bool = False

    model_config = {"env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def fix_postgres_url(self) -> "Settings":
        # Railway sometimes provides postgres:// instead of postgresql://
        if self.DATABASE_URL.startswith("postgres://"):
            self.DATABASE_URL = self.DATABASE_URL.replace(
                "postgres://", "postgresql://", 1
            )
        return self


settings = Settings()
