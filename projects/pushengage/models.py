"""
Modelos SQLAlchemy do módulo PushEngage.

- pushengage_options: documentos JSON de configuração (um por option name)
- pushengage_user_meta: metadados por usuário (ex.: subscriber ids sincronizados)
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shared.db.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PushEngageOption(Base):
    """Option persistida como documento inteiro (sem update parcial de campos)."""
    __tablename__ = "pushengage_options"

    name: Mapped[str] = mapped_column(String(191), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )


class PushEngageUserMeta(Base):
    """Metadado de um usuário do site host."""
    __tablename__ = "pushengage_user_meta"
    __table_args__ = (
        UniqueConstraint("user_id", "meta_key", name="uq_pushengage_user_meta_key"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    meta_key: Mapped[str] = mapped_column(String(191), nullable=False)
    meta_value: Mapped[Any] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )
