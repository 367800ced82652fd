import logging
from collections.abc import Sequence

from codex_scaffold.core.changes import UpdateRecorder
from codex_scaffold.core.naming import normalize_path
from codex_scaffold.core.ports.tree import Tree
from codex_scaffold.models import CommitSummary, StagedFile

logger = logging.getLogger(__name__)


def commit_changes(
    tree: Tree,
    recorders: Sequence[UpdateRecorder],
    staged_files: Sequence[StagedFile],
) -> CommitSummary:
    """Stage every recorder and new file, then commit them together.

    If any staging step fails the staged set is discarded and nothing is written.
    """
    summary = CommitSummary()
    try:
        for recorder in recorders:
            if not recorder.changes:
                continue
            tree.commit_update(recorder)
            summary.updated.append(recorder.path)
            logger.info("Staged %d insertion(s) into %s", len(recorder.changes), recorder.path)

        summary.created = tree.merge(staged_files)
        created = set(summary.created)
        summary.unchanged = [normalize_path(f.path) for f in staged_files if normalize_path(f.path) not in created]
        for path in summary.created:
            logger.info("Staged new file %s", path)
    except Exception:
        tree.discard()
        raise

    tree.commit()
    return summary
