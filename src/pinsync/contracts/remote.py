"""Remote store adapter contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from pinsync.contracts.document import RemoteSnapshot, SyncDocument


class RemoteStore(ABC):
    """Versioned single-document store.

    ``read`` returns ``None`` when the document does not exist and raises
    :class:`~pinsync.contracts.exceptions.RemoteStoreError` on failure.
    ``write`` is a full-document conditional replace with exactly one attempt.
    """

    @abstractmethod
    async def __aenter__(self) -> RemoteStore: ...  # pragma: no cover

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...  # pragma: no cover

    @abstractmethod
    async def read(self) -> RemoteSnapshot | None: ...  # pragma: no cover

    @abstractmethod
    async def read_revision(self) -> str | None: ...  # pragma: no cover

    @abstractmethod
    async def write(self, document: SyncDocument) -> None: ...  # pragma: no cover
