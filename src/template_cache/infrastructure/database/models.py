"""SQLAlchemy models for the key-value store and the template backend."""

from datetime import datetime

from sqlalchemy import TIMESTAMP, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.const import MAX_TEMPLATE_NAME_LENGTH
from .base import Base


class KeyValueModel(Base):
    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = {"extend_existing": True}


class TemplateModel(Base):
    __tablename__ = "templates"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(MAX_TEMPLATE_NAME_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_templates_user_created', 'user_id', 'created_at'),
        {"extend_existing": True}
    )
