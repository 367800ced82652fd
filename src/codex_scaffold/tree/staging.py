import logging
import posixpath
from collections.abc import Iterable

from codex_scaffold.core.changes import UpdateRecorder
from codex_scaffold.core.errors import FileConflict
from codex_scaffold.core.naming import normalize_path
from codex_scaffold.models import StagedFile

logger = logging.getLogger(__name__)


class StagedTree:
    """Shared staging logic; subclasses supply committed storage.

    Writes land in an overlay that ``read`` sees. ``commit`` publishes the overlay,
    ``discard`` throws it away.
    """

    def __init__(self) -> None:
        self._staged: dict[str, bytes] = {}

    # -- storage hooks -------------------------------------------------------

    def _read_committed(self, path: str) -> bytes | None:
        raise NotImplementedError

    def _list_committed(self, directory: str) -> list[str]:
        raise NotImplementedError

    def _write(self, path: str, content: bytes) -> None:
        raise NotImplementedError

    # -- reads ---------------------------------------------------------------

    @property
    def staged_paths(self) -> list[str]:
        return sorted(self._staged)

    def read(self, path: str) -> bytes | None:
        key = normalize_path(path)
        if key in self._staged:
            return self._staged[key]
        return self._read_committed(key)

    def exists(self, path: str) -> bool:
        return self.read(path) is not None

    def list_files(self, directory: str) -> list[str]:
        key = normalize_path(directory)
        names = set(self._list_committed(key))
        names.update(posixpath.basename(p) for p in self._staged if posixpath.dirname(p) == key)
        return sorted(names)

    # -- staged writes -------------------------------------------------------

    def begin_update(self, path: str) -> UpdateRecorder:
        key = normalize_path(path)
        content = self.read(key)
        if content is None:
            raise FileNotFoundError(f"{key} does not exist.")
        return UpdateRecorder(path=key, original=content)

    def commit_update(self, recorder: UpdateRecorder) -> None:
        current = self.read(recorder.path)
        if current != recorder.original:
            raise RuntimeError(f"{recorder.path} changed after its update recorder was created.")
        self._staged[recorder.path] = recorder.apply()

    def create(self, path: str, content: bytes) -> None:
        key = normalize_path(path)
        if self.exists(key):
            raise FileConflict(key)
        self._staged[key] = content

    def merge(self, files: Iterable[StagedFile]) -> list[str]:
        """Stage new files; identical existing files are skipped, differing ones conflict."""
        staged: list[str] = []
        for staged_file in files:
            key = normalize_path(staged_file.path)
            existing = self.read(key)
            if existing == staged_file.content:
                logger.debug("%s is unchanged, skipping", key)
                continue
            if existing is not None:
                raise FileConflict(key)
            self._staged[key] = staged_file.content
            staged.append(key)
        return staged

    def commit(self) -> list[str]:
        paths = sorted(self._staged)
        for path in paths:
            self._write(path, self._staged[path])
        self._staged.clear()
        return paths

    def discard(self) -> None:
        if self._staged:
            logger.debug("Discarding %d staged file(s)", len(self._staged))
        self._staged.clear()
