"""Base abstraction for asset sources.

A source enumerates the files of an asset tree and reads their bytes. The
build pipeline and the SVG-embedding resolver only talk to this interface.
"""

from abc import ABC, abstractmethod


class AssetSource(ABC):
    """Abstract base class for asset trees.

    Paths handed to and returned from a source are relative to its root and
    use POSIX separators, so they can be used directly as path-table keys.
    """

    @abstractmethod
    def list_files(self) -> list[str]:
        """List the files that should be processed as standalone assets.

        Returns:
            Relative paths, in no particular order

        Raises:
            AssetIOError: If the tree cannot be walked
        """
        pass

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Read a file's bytes.

        Files excluded from ``list_files`` (ignore-marked partials) can still
        be read; they are inlined by other assets.

        Args:
            path: Path relative to the source root

        Returns:
            The file contents

        Raises:
            AssetIOError: If the file cannot be read
        """
        pass
