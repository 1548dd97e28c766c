"""Port interface for the template persistence backend."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..domain.template import Template


class TemplateRepository(ABC):
    """Port interface for template storage operations.

    The backend is the source of truth; the cache only accelerates reads.
    """

    @abstractmethod
    def list_templates(self, user_id: str) -> List[Template]:
        """Return every template owned by the user, newest first."""
        pass

    @abstractmethod
    def get_template(self, template_id: str) -> Optional[Template]:
        """Find a template by its id. Returns None if not found."""
        pass

    @abstractmethod
    def create_template(self, user_id: str, name: str, content: str) -> Template:
        """Create a template and return it with its assigned id."""
        pass

    @abstractmethod
    def update_template(
        self,
        template_id: str,
        name: Optional[str] = None,
        content: Optional[str] = None
    ) -> Optional[Template]:
        """Update name and/or content. Returns None if the id is unknown."""
        pass

    @abstractmethod
    def delete_template(self, template_id: str) -> bool:
        """Delete a template. Returns True if a record was removed."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the database connection."""
        pass
