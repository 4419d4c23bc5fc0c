"""BaseService — foundation for all blogforge services.

Every service receives a :class:`Project` at construction time. The
project provides the configuration, directory layout and synthesized
schemas; services own reading and writing records.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blogforge.config.models import BlogForgeConfig
    from blogforge.domain.schemas import ContentSchema
    from blogforge.infrastructure.project import Project

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class ContentService(BaseService):
            def create(self, data: dict[str, Any]) -> ServiceResult:
                schema = self._schema("article")
                ...
    """

    def __init__(self, project: Project) -> None:
        self._project = project

    @property
    def config(self) -> BlogForgeConfig:
        return self._project.config

    def _schema(self, collection: str) -> ContentSchema:
        return self._project.schemas.for_collection(collection)
