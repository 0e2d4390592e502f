"""Schemas de conexão do site."""

from pydantic import BaseModel, Field


class ConnectSiteRequest(BaseModel):
    site_id: str = Field(min_length=1)
    api_key: str = Field(min_length=1)


class SiteStatusResponse(BaseModel):
    connected: bool
    site_id: str | None = None
    version: str
