"""Read-through/write-through access to templates."""

from typing import List, Optional

from src.shared.logging import LoggingManager
from ..domain.template import Template
from ..ports.template_repository import TemplateRepository
from .template_cache_service import TemplateCacheService

logger = LoggingManager.get_logger(__name__)


class TemplateService:
    """Serves templates from the cache, falling back to the repository.

    The repository is the source of truth: its errors propagate to the
    caller, and the cache is only updated after a repository write succeeds.
    """

    def __init__(self, repository: TemplateRepository, cache: TemplateCacheService):
        self.repository = repository
        self.cache = cache

    def list_templates(self, user_id: str, force_refresh: bool = False) -> List[Template]:
        """List a user's templates, newest first.

        Args:
            user_id: Owner of the templates
            force_refresh: Skip the cache and reload from the repository
        """
        if self.cache.user_id != user_id:
            self.cache.set_user(user_id)

        if not force_refresh:
            cached = self.cache.get_templates()
            if cached is not None:
                return cached

        logger.debug(f"Loading templates for user {user_id} from repository")
        templates = self.repository.list_templates(user_id)
        self.cache.set_templates(templates)
        return templates

    def get_template(self, template_id: str) -> Optional[Template]:
        """Fetch one template and count it as used."""
        template = None
        cached = self.cache.get_templates()
        if cached:
            template = next((t for t in cached if t.id == template_id), None)
        if template is None:
            template = self.repository.get_template(template_id)
            if template is None:
                return None
            self.cache.add_template(template)
        self.cache.record_template_access(template_id)
        return template

    def create_template(self, user_id: str, name: str, content: str) -> Template:
        template = self.repository.create_template(user_id, name, content)
        self.cache.add_template(template)
        logger.info(f"Template created: {template.name}")
        return template

    def update_template(
        self,
        template_id: str,
        name: Optional[str] = None,
        content: Optional[str] = None
    ) -> Optional[Template]:
        template = self.repository.update_template(template_id, name=name, content=content)
        if template is None:
            self.cache.remove_template(template_id)
            return None
        self.cache.update_template(template)
        return template

    def delete_template(self, template_id: str) -> bool:
        deleted = self.repository.delete_template(template_id)
        self.cache.remove_template(template_id)
        return deleted

    def get_most_used(self, limit: int = 5) -> List[Template]:
        return self.cache.get_most_used_templates(limit)
