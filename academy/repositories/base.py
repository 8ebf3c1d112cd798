"""
Document-backed repository base class.

A repository owns one document holding a single array property, e.g.
{"students": [...]}. Every save rewrites the whole document.
"""

import logging
from typing import Any, Callable, Dict, Generic, List, TypeVar

from ..errors import AcademyError, RemoteFetchError
from ..storage.interfaces import DocumentStore


logger = logging.getLogger(__name__)


R = TypeVar('R')


class DocumentRepository(Generic[R]):
    """
    Typed list access to one JSON document.

    get_all() degrades to an empty list when the document cannot be read,
    so screens that only display data keep working through transient host
    failures. An empty result therefore does not prove the document is
    empty. Code that writes back what it read must use load(), which
    propagates the failure instead.

    save() never swallows errors. The host sees each save as one atomic
    overwrite, but the version lookup and the overwrite are separate
    requests: two concurrent savers can both see the same version, and
    the stored document then holds exactly one of their lists.

    Attributes:
        store: Document store to read from and write to
        path: Document path
        property_name: Name of the array property inside the document
    """

    entity_label = "records"

    def __init__(
        self,
        store: DocumentStore,
        path: str,
        property_name: str,
        from_dict: Callable[[Dict[str, Any]], R],
        to_dict: Callable[[R], Dict[str, Any]]
    ):
        self.store = store
        self.path = path
        self.property_name = property_name
        self._from_dict = from_dict
        self._to_dict = to_dict

    def _unwrap(self, document: Any) -> List[R]:
        if not isinstance(document, dict):
            raise RemoteFetchError(
                f"Document is not an object (got {type(document).__name__})",
                path=self.path,
            )

        items = document.get(self.property_name) or []
        if not isinstance(items, list):
            raise RemoteFetchError(
                f"Property '{self.property_name}' is not a list",
                path=self.path,
            )

        return [self._from_dict(item) for item in items if isinstance(item, dict)]

    def load(self) -> List[R]:
        """
        Read all records, propagating failures.

        Raises:
            ConfigurationError: If the store is not configured
            RemoteFetchError: If the document cannot be read or parsed
        """
        return self._unwrap(self.store.read(self.path))

    def get_all(self) -> List[R]:
        """
        Read all records, or an empty list if the read fails.

        Returns:
            Records in stored order
        """
        try:
            return self.load()
        except AcademyError as e:
            logger.error(f"Failed to load {self.entity_label} from {self.path}: {e}")
            return []

    def save(self, records: List[R]) -> Dict[str, Any]:
        """
        Replace the stored list with records.

        Args:
            records: Complete list to persist, in the order to store it

        Returns:
            Host response metadata

        Raises:
            ConfigurationError: If the store is not configured
            RemoteWriteError: If the host rejects the write
        """
        document = {self.property_name: [self._to_dict(r) for r in records]}
        try:
            return self.store.write(self.path, document)
        except AcademyError as e:
            logger.error(f"Failed to save {self.entity_label} to {self.path}: {e}")
            raise
