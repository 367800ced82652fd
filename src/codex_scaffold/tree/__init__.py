from codex_scaffold.tree.host import HostTree
from codex_scaffold.tree.memory import InMemoryTree
from codex_scaffold.tree.staging import StagedTree

__all__ = [
    "HostTree",
    "InMemoryTree",
    "StagedTree",
]
