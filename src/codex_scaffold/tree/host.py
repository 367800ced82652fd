import logging
import os
import tempfile
from pathlib import Path

from codex_scaffold.tree.staging import StagedTree

logger = logging.getLogger(__name__)


class HostTree(StagedTree):
    """A staged tree over a directory on disk. Nothing touches disk before ``commit``."""

    def __init__(self, root: str | Path, dry_run: bool = False) -> None:
        super().__init__()
        self._root = Path(root).resolve()
        self._dry_run = dry_run

    @property
    def root(self) -> Path:
        return self._root

    def _host_path(self, path: str) -> Path:
        return self._root / path.lstrip("/")

    def _read_committed(self, path: str) -> bytes | None:
        host_path = self._host_path(path)
        if not host_path.is_file():
            return None
        return host_path.read_bytes()

    def _list_committed(self, directory: str) -> list[str]:
        host_dir = self._host_path(directory)
        if not host_dir.is_dir():
            return []
        return [entry.name for entry in host_dir.iterdir() if entry.is_file()]

    def _write(self, path: str, content: bytes) -> None:
        host_path = self._host_path(path)
        if self._dry_run:
            logger.info("Would write %s", host_path)
            return
        host_path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(dir=host_path.parent, prefix=f".{host_path.name}.")
        try:
            with os.fdopen(fd, "wb") as temp_file:
                temp_file.write(content)
            os.replace(temp_name, host_path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
        logger.info("Wrote %s", host_path)
