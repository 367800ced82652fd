import posixpath
from collections.abc import Mapping

from codex_scaffold.core.naming import normalize_path
from codex_scaffold.tree.staging import StagedTree


class InMemoryTree(StagedTree):
    def __init__(self, files: Mapping[str, str | bytes] | None = None) -> None:
        super().__init__()
        self.files: dict[str, bytes] = {}
        for path, content in (files or {}).items():
            self.files[normalize_path(path)] = content.encode("utf-8") if isinstance(content, str) else content

    def _read_committed(self, path: str) -> bytes | None:
        return self.files.get(path)

    def _list_committed(self, directory: str) -> list[str]:
        return [posixpath.basename(p) for p in self.files if posixpath.dirname(p) == directory]

    def _write(self, path: str, content: bytes) -> None:
        self.files[path] = content

    def text(self, path: str) -> str | None:
        content = self.read(path)
        return content.decode("utf-8") if content is not None else None
