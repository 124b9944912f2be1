"""Repository base: shared contract for journal data sources.

Trade and tag data live in exported files under data/. Each repository
loads its file on first use, keeps the parsed result until
clear_cache(), and reports unreadable or malformed data as
RepositoryError so callers handle one exception type.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """Read-only access to one exported journal file."""

    @abstractmethod
    def get_all(self) -> T:
        """Load (or return the cached) contents of the file.

        Raises:
            RepositoryError: If the file is missing or cannot be parsed
        """

    @abstractmethod
    def clear_cache(self) -> None:
        """Drop cached contents so the next get_all() reloads from disk."""


class RepositoryError(Exception):
    """Journal data could not be loaded or a row could not be parsed.

    Attributes:
        path: File the failure relates to, when known
    """

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(f"{message}" + (f" (path: {path})" if path else ""))
