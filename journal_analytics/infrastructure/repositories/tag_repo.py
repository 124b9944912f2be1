"""Tag Repository: Access to user tag definitions.

Provides read access to data/tags.json, a JSON array of rows with
id, user_id, name, slug, color and description.
"""

import json

from journal_analytics.domain.models import Tag
from journal_analytics.infrastructure.config import DataPaths, DEFAULT_PATHS
from journal_analytics.infrastructure.logging import get_logger
from journal_analytics.infrastructure.repositories.base import Repository, RepositoryError

logger = get_logger(__name__)


class TagRepository(Repository[dict[str, Tag]]):
    """Repository for tag definitions.

    Tags are optional: a missing tags file yields no tags rather than
    an error.

    Example:
        >>> repo = TagRepository()
        >>> tags = repo.get_for_user("user-1")
        >>> tag = repo.get("tag-1")
    """

    def __init__(self, paths: DataPaths = DEFAULT_PATHS):
        self._paths = paths
        self._cache: dict[str, Tag] | None = None

    def get_all(self) -> dict[str, Tag]:
        """Load all tags.

        Returns:
            Dict mapping tag id to Tag

        Raises:
            RepositoryError: If the file exists but cannot be parsed
        """
        if self._cache is not None:
            return self._cache

        path = self._paths.tags_json
        if not path.exists():
            logger.debug("No tag file at %s", path)
            self._cache = {}
            return self._cache

        try:
            with open(path, encoding="utf-8") as f:
                rows = json.load(f)
            tags = [Tag.from_record(row) for row in rows]
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.error("Failed to read tags from %s: %s", path, e)
            raise RepositoryError(f"Failed to read tags: {e}", str(path)) from e

        self._cache = {tag.id: tag for tag in tags}
        return self._cache

    def get(self, tag_id: str) -> Tag | None:
        """Get a tag by id, or None if unknown."""
        return self.get_all().get(tag_id)

    def get_for_user(self, user_id: str) -> list[Tag]:
        """Get an owner's tags sorted by name."""
        tags = [t for t in self.get_all().values() if t.user_id == user_id]
        return sorted(tags, key=lambda t: t.name.lower())

    def clear_cache(self) -> None:
        """Clear cached data."""
        self._cache = None
