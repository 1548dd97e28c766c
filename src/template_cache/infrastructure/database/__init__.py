"""Database models for the template cache."""

from .base import Base
from .models import KeyValueModel, TemplateModel

__all__ = ["Base", "KeyValueModel", "TemplateModel"]
