"""
Configurações globais do serviço PushEngage.
Carrega variáveis de ambiente e define configurações da aplicação.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Configurações da aplicação carregadas do ambiente."""

    # Aplicação
    app_name: str = "PushEngage Gateway"
    app_version: str = "4.0.10"
    debug: bool = False
    log_level: str = "INFO"
    environment: str = "development"

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./pushengage.db",
        description="URL de conexão async do SQLAlchemy"
    )
    database_echo: bool = False

    # CORS
    cors_allow_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """
    Retorna instância cacheada das configurações.
    Use esta função para obter as configurações em qualquer lugar da aplicação.
    """
    return Settings()


# Instância global para imports diretos
settings = get_settings()
