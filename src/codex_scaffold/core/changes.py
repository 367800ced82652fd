from dataclasses import dataclass, field


@dataclass(frozen=True)
class InsertChange:
    """Insert ``to_add`` at byte ``pos`` of the original content of ``path``."""

    path: str
    pos: int
    to_add: str


@dataclass(frozen=True)
class _Insert:
    change: InsertChange
    right: bool
    order: int


@dataclass
class UpdateRecorder:
    """Queue insertions against one file; offsets always refer to ``original``.

    Nothing is deduplicated. ``apply`` splices every insertion in a single pass,
    so the order in which insertions were recorded cannot shift each other's offsets.
    """

    path: str
    original: bytes
    _inserts: list[_Insert] = field(default_factory=list, init=False, repr=False)

    @property
    def changes(self) -> list[InsertChange]:
        return [insert.change for insert in self._inserts]

    def insert_left(self, pos: int, text: str) -> None:
        self._record(pos, text, right=False)

    def insert_right(self, pos: int, text: str) -> None:
        self._record(pos, text, right=True)

    def record(self, change: InsertChange) -> None:
        if change.path != self.path:
            raise ValueError(f"Change for {change.path} recorded against {self.path}")
        self.insert_left(change.pos, change.to_add)

    def _record(self, pos: int, text: str, right: bool) -> None:
        if not 0 <= pos <= len(self.original):
            raise ValueError(f"Offset {pos} is outside {self.path} (0..{len(self.original)})")
        change = InsertChange(path=self.path, pos=pos, to_add=text)
        self._inserts.append(_Insert(change=change, right=right, order=len(self._inserts)))

    def apply(self) -> bytes:
        pieces: list[bytes] = []
        cursor = 0
        for insert in sorted(self._inserts, key=lambda i: (i.change.pos, i.right, i.order)):
            pieces.append(self.original[cursor : insert.change.pos])
            pieces.append(insert.change.to_add.encode("utf-8"))
            cursor = insert.change.pos
        pieces.append(self.original[cursor:])
        return b"".join(pieces)
