from collections.abc import Iterable
from typing import Protocol

from codex_scaffold.core.changes import UpdateRecorder
from codex_scaffold.models import StagedFile


class Tree(Protocol):
    """A file tree whose writes are staged until ``commit``.

    Reads see staged content. Paths are POSIX strings rooted at ``/``.
    """

    def read(self, path: str) -> bytes | None: ...

    def exists(self, path: str) -> bool: ...

    def list_files(self, directory: str) -> list[str]: ...

    def begin_update(self, path: str) -> UpdateRecorder: ...

    def commit_update(self, recorder: UpdateRecorder) -> None: ...

    def create(self, path: str, content: bytes) -> None: ...

    def merge(self, files: Iterable[StagedFile]) -> list[str]: ...

    def commit(self) -> list[str]: ...

    def discard(self) -> None: ...
