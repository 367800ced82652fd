from pydantic import BaseModel, ConfigDict, Field


class StagedFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    content: bytes


class ScaffoldOptions(BaseModel):
    """A request to generate one directive."""

    name: str
    project: str | None = None
    path: str | None = None
    # None means "not specified": the project prefix applies. An empty string disables prefixing.
    prefix: str | None = None
    selector: str | None = None
    flat: bool = True
    skip_tests: bool = False
    skip_import: bool = False
    standalone: bool = True
    export: bool = False
    module: str | None = None


class AppliedChange(BaseModel):
    path: str
    pos: int
    to_add: str


class CommitSummary(BaseModel):
    created: list[str] = Field(default_factory=list)
    updated: list[str] = Field(default_factory=list)
    unchanged: list[str] = Field(default_factory=list)


class ScaffoldResult(BaseModel):
    selector: str
    class_name: str
    path: str
    host_file: str | None = None
    changes: list[AppliedChange] = Field(default_factory=list)
    created: list[str] = Field(default_factory=list)
    updated: list[str] = Field(default_factory=list)
    unchanged: list[str] = Field(default_factory=list)
