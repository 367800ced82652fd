import logging
import os

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from codex_scaffold.core.errors import ConfigurationError
from codex_scaffold.core.naming import normalize_path
from codex_scaffold.core.ports.tree import Tree

logger = logging.getLogger(__name__)

DEFAULT_WORKSPACE_FILE = "angular.json"


class ProjectConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    root: str = ""
    source_root: str | None = Field(default=None, alias="sourceRoot")
    prefix: str | None = None
    project_type: str = Field(default="application", alias="projectType")


class WorkspaceConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    version: int = 1
    default_project: str | None = Field(default=None, alias="defaultProject")
    projects: dict[str, ProjectConfig] = Field(default_factory=dict)

    def get_project(self, name: str | None) -> ProjectConfig:
        if name is None:
            name = self.default_project
        if name is None and len(self.projects) == 1:
            name = next(iter(self.projects))
        if name is None:
            raise ConfigurationError("No project given and the workspace does not define a default project.")
        project = self.projects.get(name)
        if project is None:
            raise ConfigurationError(f'Project "{name}" does not exist.')
        return project


def workspace_path(path: str | None = None) -> str:
    return path or os.getenv("CODEX_SCAFFOLD_WORKSPACE", DEFAULT_WORKSPACE_FILE)


def load_workspace(tree: Tree, path: str | None = None) -> WorkspaceConfig:
    resolved = workspace_path(path)
    content = tree.read(resolved)
    if content is None:
        raise ConfigurationError(f"Workspace file {resolved} not found.")
    try:
        workspace = WorkspaceConfig.model_validate_json(content)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid workspace file {resolved}: {exc}") from exc
    logger.debug("Loaded workspace %s with %d project(s)", resolved, len(workspace.projects))
    return workspace


def build_default_path(project: ProjectConfig) -> str:
    """``/<sourceRoot>/app`` for applications, ``/<sourceRoot>/lib`` for libraries."""
    root = project.source_root if project.source_root is not None else f"{project.root}/src"
    directory = "app" if project.project_type == "application" else "lib"
    return normalize_path(f"{root}/{directory}")
