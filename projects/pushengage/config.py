"""
Configurações do módulo PushEngage.
Carrega variáveis de ambiente específicas para integração com as APIs da PushEngage.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class PushEngageSettings(BaseSettings):
    """Configurações para integração com a PushEngage."""

    # APIs
    pushengage_api_url: str = Field(
        default="https://dashboard-api.pushengage.com/apiv1/",
        description="URL base da API privada (JSON, header x-pe-api-key)"
    )
    pushengage_rest_api_url: str = Field(
        default="https://api.pushengage.com/apiv1/",
        description="URL base da API REST pública (form-urlencoded, header api-key)"
    )
    pushengage_request_timeout: float = Field(
        default=10.0,
        description="Timeout fixo em segundos por chamada (sem retry)"
    )

    # Identificação do cliente
    pushengage_version: str = Field(
        default="4.0.10",
        description="Versão do plugin/SDK enviada em x-pe-sdk-version"
    )
    pushengage_client_name: str = Field(
        default="WordPress",
        description="Nome do cliente enviado em x-pe-client"
    )
    pushengage_client_version: str = Field(
        default="6.5",
        description="Versão da plataforma host enviada em x-pe-client-version"
    )
    pushengage_site_url: str = Field(
        default="http://localhost:8000",
        description="URL pública do site (usada no User-Agent)"
    )

    # Sessão e nonces
    pushengage_session_secret: str = Field(
        default="change-me-pushengage-session-secret-key",
        description="Segredo HS256 dos tokens de sessão e dos nonces"
    )
    pushengage_session_cookie: str = Field(
        default="pe_session",
        description="Nome do cookie de sessão"
    )
    pushengage_nonce_lifetime: int = Field(
        default=86400,
        description="Tempo de vida do nonce em segundos"
    )

    # Subscriber sync
    pushengage_subscriber_ids_limit: int = Field(
        default=5,
        description="Quantidade máxima de subscriber ids guardados por usuário"
    )
    pushengage_sync_url: str = Field(
        default="/api/v1/pushengage/subscriber-sync",
        description="URL do endpoint de sync entregue ao cliente"
    )

    # Service worker
    pushengage_sw_sdk_url: str = Field(
        default="https://clientcdn.pushengage.com/sdks/service-worker.js",
        description="Script do service worker importado quando appId é informado"
    )
    pushengage_sw_subdomain_url: str = Field(
        default="https://{subdomain}.pushengage.com/service-worker.js",
        description="Template do service worker legado por subdomínio"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def user_agent(self) -> str:
        """User-Agent enviado às APIs da PushEngage."""
        return (
            f"{self.pushengage_client_name}/{self.pushengage_client_version}; "
            f"Plugin/{self.pushengage_version}; {self.pushengage_site_url}"
        )


@lru_cache()
def get_pushengage_settings() -> PushEngageSettings:
    """
    Retorna instância cacheada das configurações da PushEngage.
    Use esta função para obter as configurações em qualquer lugar do módulo.
    """
    return PushEngageSettings()


# Instância global para imports diretos
pe_settings = get_pushengage_settings()
