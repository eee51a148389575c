"""
In-memory embedding index over vault notes.
Flat, insertion-ordered list of records keyed by note identifier.
"""

from typing import Dict, Iterator, List, Optional

import numpy as np

from .types import DocumentRecord, as_vector


class EmbeddingIndex:
    """Owned, insertion-ordered collection of DocumentRecords.

    Identifiers are unique within an index. Each instance is independent,
    callers pass it to the builder and search functions explicitly.
    """

    def __init__(self, records: Optional[List[DocumentRecord]] = None):
        self._records: List[DocumentRecord] = []
        self._positions: Dict[str, int] = {}
        for record in records or []:
            self.upsert_record(record.identifier, record.vector)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[DocumentRecord]:
        return iter(self._records)

    def __contains__(self, identifier: str) -> bool:
        return self.position(identifier) != -1

    def position(self, identifier: str) -> int:
        """Return the position of a record, or -1 when it is not indexed."""
        return self._positions.get(identifier, -1)

    def get(self, identifier: str) -> Optional[DocumentRecord]:
        """Return the record for an identifier, if any."""
        i = self.position(identifier)
        return self._records[i] if i != -1 else None

    def identifiers(self) -> List[str]:
        return [record.identifier for record in self._records]

    def upsert_record(self, identifier: str, vector) -> bool:
        """Replace the vector of an existing record in place or append a new one.

        Returns True when a new record was appended.
        """
        vector = as_vector(vector)
        i = self.position(identifier)
        if i != -1:
            self._records[i].vector = vector
            return False

        self._positions[identifier] = len(self._records)
        self._records.append(DocumentRecord(identifier=identifier, vector=vector))
        return True

    def remove(self, identifier: str) -> bool:
        """Delete a record by identifier. Returns False if it was not present."""
        i = self.position(identifier)
        if i == -1:
            return False
        del self._records[i]
        del self._positions[identifier]
        # Records after the removed one shift down by one
        for j in range(i, len(self._records)):
            self._positions[self._records[j].identifier] = j
        return True

    def clear(self) -> None:
        """Clear all records from the index."""
        self._records.clear()
        self._positions.clear()

    def snapshot(self) -> List[tuple]:
        """Observable state as (identifier, vector as tuple) pairs, in order."""
        return [(r.identifier, tuple(np.asarray(r.vector).tolist())) for r in self._records]
