"""SQLite adapter implementation for the TemplateRepository port."""

import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from src.shared.logging import LoggingManager
from ...domain.template import Template
from ...ports.template_repository import TemplateRepository
from ..database.models import Base, TemplateModel

logger = LoggingManager.get_logger(__name__)


class SQLiteTemplateRepository(TemplateRepository):
    """SQLite implementation of the template persistence backend."""

    def __init__(self, db_path: Path, check_same_thread: bool = False):
        """Initialize SQLite template repository.

        Args:
            db_path: Path to SQLite database file
            check_same_thread: For SQLite thread safety (default False)
        """
        self.db_path = db_path
        if str(db_path) != ":memory:":
            db_path.parent.mkdir(parents=True, exist_ok=True)
        self._engine = create_engine(
            f"sqlite:///{db_path}",
            connect_args={"check_same_thread": check_same_thread}
        )
        Base.metadata.create_all(self._engine, tables=[TemplateModel.__table__])

    # =========================================================================
    # Domain conversion methods
    # =========================================================================

    def _to_template_domain(self, template: TemplateModel) -> Template:
        """Convert TemplateModel to Template domain entity."""
        return Template(
            id=template.id,
            name=template.name,
            content=template.content,
            created_at=template.created_at,
            user_id=template.user_id,
        )

    # =========================================================================
    # Port interface methods
    # =========================================================================

    def list_templates(self, user_id: str) -> List[Template]:
        with Session(self._engine) as session:
            templates = session.query(TemplateModel).filter(
                TemplateModel.user_id == user_id
            ).order_by(TemplateModel.created_at.desc()).all()
            return [self._to_template_domain(t) for t in templates]

    def get_template(self, template_id: str) -> Optional[Template]:
        with Session(self._engine) as session:
            template = session.get(TemplateModel, template_id)
            return self._to_template_domain(template) if template else None

    def create_template(self, user_id: str, name: str, content: str) -> Template:
        # Validate before touching the database
        template = Template(
            id=str(uuid.uuid4()),
            name=name,
            content=content,
            created_at=datetime.now(timezone.utc),
            user_id=user_id,
        )
        with Session(self._engine) as session:
            session.add(TemplateModel(
                id=template.id,
                user_id=template.user_id,
                name=template.name,
                content=template.content,
                created_at=template.created_at.replace(tzinfo=None),
            ))
            session.commit()
        logger.debug(f"Created template {template.id} for user {user_id}")
        return template

    def update_template(
        self,
        template_id: str,
        name: Optional[str] = None,
        content: Optional[str] = None
    ) -> Optional[Template]:
        with Session(self._engine) as session:
            template = session.get(TemplateModel, template_id)
            if template is None:
                return None
            updated = self._to_template_domain(template).model_copy(
                update={k: v for k, v in (("name", name), ("content", content)) if v is not None}
            )
            # model_copy skips validation
            updated = Template.model_validate(updated.model_dump())
            template.name = updated.name
            template.content = updated.content
            session.commit()
            return updated

    def delete_template(self, template_id: str) -> bool:
        with Session(self._engine) as session:
            deleted = session.query(TemplateModel).filter(
                TemplateModel.id == template_id
            ).delete()
            session.commit()
            return deleted > 0

    def close(self) -> None:
        """Close the database connection."""
        if self._engine:
            self._engine.dispose()
