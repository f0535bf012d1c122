"""Abstract base class for paste data access objects (DAOs).

This class establishes a consistent contract for all paste DAO implementations,
regardless of the underlying storage mechanism (Redis or process memory).

Responsibilities:
    - Provide an interface for storing, reading, updating and deleting PasteModel objects.
    - Provide per-paste mutual exclusion for read-check-write sequences.
    - Standardize error handling across data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from ephemeralpaste.dao.memory import PasteMemoryDAO
        >>> dao = PasteMemoryDAO()

        >>> dao.put(paste)
        <PasteMemoryDAO>

        >>> with dao.lock(paste.id):
        ...     dao.update(paste.id, lambda p: replace(p, view_count=p.view_count + 1))
        True

        >>> dao.get(paste.id).view_count
        1

        >>> dao.delete(paste.id)
        True
        >>> dao.get(paste.id) is None
        True
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Optional

from ephemeralpaste.constants import Backend
from ephemeralpaste.models import PasteModel


PasteMutator = Callable[[PasteModel], PasteModel]


class PasteBaseDAO(ABC):
    """Interface for paste data access objects (DAOs).

    Methods:
        put(paste: PasteModel, ttl_hint: Optional[int] = None) -> PasteBaseDAO:
            Create or overwrite a paste.
            Raises DataStoreError on connection or write failure.

        get(paste_id: str) -> PasteModel | None:
            Retrieve a paste. Returns None if it was never created, expired
            in the data store, or was deleted.
            Raises DataStoreError on connection or read failure.

        update(paste_id: str, mutator: PasteMutator) -> bool:
            Atomically apply `mutator` to the stored paste.
            Returns False if the paste doesn't exist.
            Raises DataStoreError on connection or write failure.

        delete(paste_id: str) -> bool:
            Remove a paste. Returns True if something was removed.
            Raises DataStoreError on connection or write failure.

        lock(paste_id: str) -> context manager:
            Hold exclusive access to one paste. Never blocks other pastes.
            Raises DataStoreError if the lock can't be acquired.

        healthcheck() -> bool:
            True if the data store is reachable.

        close() -> None:
            Release data store resources.

    Subclassing:
        Datastore-specific implementations (e.g., PasteRedisDAO or
        PasteMemoryDAO) must extend this class and implement all
        abstract methods.

    NOTE:
        - The DAO owns how a paste is encoded and where it is placed, not what
          its fields mean. Expiry and view limits are decided by the caller.
    """

    backend: Backend

    @abstractmethod
    def put(self, paste: PasteModel, ttl_hint: Optional[int] = None) -> 'PasteBaseDAO':
        """Create or overwrite a paste in the data store.

        Args:
            paste (PasteModel):
                The paste to store under `paste.id`.

            ttl_hint (Optional[int]):
                Physical expiry in seconds. Implementations fall back to
                `paste.ttl_seconds` (and then to their own default) if None.

        Returns:
            PasteBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, paste_id: str) -> PasteModel | None:
        """Retrieve a paste from the data store by its id.

        Args:
            paste_id (str):
                The id of the paste to be retrieved.

        Returns:
            PasteModel | None: The PasteModel instance if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def update(self, paste_id: str, mutator: PasteMutator) -> bool:
        """Apply a partial update to a stored paste as one indivisible step.

        Args:
            paste_id (str):
                The id of the paste to be updated.

            mutator (Callable[[PasteModel], PasteModel]):
                Receives the currently stored paste and returns its replacement.

        Returns:
            bool: True if the paste was updated, False if it doesn't exist.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, paste_id: str) -> bool:
        """Remove a paste from the data store.

        Returns:
            bool: True if a paste was removed, False if there was nothing to remove.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def lock(self, paste_id: str) -> AbstractContextManager[None]:
        """Return a context manager holding exclusive access to one paste.

        Raises:
            DataStoreError:
                If the lock can't be acquired.
        """
        pass

    @abstractmethod
    def healthcheck(self) -> bool:
        pass

    @abstractmethod
    def close(self) -> None:
        pass
