"""Schemas de request para notificações."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class UtmParams(BaseModel):
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    utm_term: Optional[str] = None
    utm_content: Optional[str] = None
    enabled: Optional[bool] = None


class NotificationAction(BaseModel):
    label: str
    url: str


class AndroidPush(BaseModel):
    model_config = ConfigDict(extra="allow")

    deep_link: Optional[str] = None
    large_icon: Optional[str] = None
    big_picture: Optional[str] = None
    small_icon: Optional[str] = None
    group_key: Optional[str] = None
    channel_id: Optional[int] = None
    action_buttons: Optional[list[NotificationAction]] = None


class IosActionButton(BaseModel):
    id: str
    label: str


class IosPush(BaseModel):
    model_config = ConfigDict(extra="allow")

    media: Optional[str] = None
    sound: Optional[str] = None
    content_available: Optional[int] = None
    category: Optional[str] = None
    badge_increment: Optional[int] = None
    action_buttons: Optional[list[IosActionButton]] = None


class AdditionalData(BaseModel):
    key: str
    value: str


class MobilePush(BaseModel):
    model_config = ConfigDict(extra="allow")

    collapse_id: Optional[str] = None
    priority: Optional[str] = None
    additional_data: Optional[list[AdditionalData]] = None


class SendNotificationRequest(BaseModel):
    """Payload de envio.

    Os campos obrigatórios são validados pela facade, que agrega todos os
    ausentes numa única resposta de erro.
    """

    model_config = ConfigDict(extra="allow")

    notification_title: Optional[str] = None
    notification_message: Optional[str] = None
    notification_url: Optional[str] = None
    notification_image: Optional[str] = None
    big_image: Optional[str] = None
    status: Optional[Literal["sent", "draft", "scheduled"]] = None
    utm_params: Optional[UtmParams] = None
    notification_criteria: Optional[dict[str, Any]] = None
    require_interaction: Optional[int] = None
    actions: Optional[list[NotificationAction]] = None
    expiry: Optional[int] = Field(default=None, description="Expiração em minutos")
    android_push: Optional[AndroidPush] = None
    ios_push: Optional[IosPush] = None
    mobile_push: Optional[MobilePush] = None
