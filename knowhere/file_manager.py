"""Interface of the component that keeps index files available locally."""

from __future__ import annotations

from abc import ABC, abstractmethod


class FileManager(ABC):
    """Manages index files: fetching them to local disk, registering new ones
    for replication or backup, checking and removing them.

    Implementations must not raise: failures are reported through the return
    values described on each method.
    """

    @abstractmethod
    def load_file(self, filename: str) -> bool:
        """Make ``filename`` available on local disk; ``False`` on any error."""

    @abstractmethod
    def add_file(self, filename: str) -> bool:
        """Hand ``filename`` over to the manager; ``False`` on any error."""

    @abstractmethod
    def is_existed(self, filename: str) -> bool | None:
        """Whether ``filename`` exists, or ``None`` if the check itself failed."""

    @abstractmethod
    def remove_file(self, filename: str) -> bool:
        """Delete ``filename`` from the manager; ``False`` on any error."""