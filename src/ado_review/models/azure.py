"""Azure DevOps REST response shapes, validated at the client boundary."""
from pydantic import BaseModel, ConfigDict, Field


class _AzureModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class AzureProject(_AzureModel):
    id: str
    name: str | None = None


class AzureRepository(_AzureModel):
    id: str
    name: str | None = None
    project: AzureProject


class AzurePullRequest(_AzureModel):
    pull_request_id: int = Field(alias="pullRequestId")
    title: str
    description: str | None = None
    repository: AzureRepository


class AzureCommitRef(_AzureModel):
    commit_id: str = Field(alias="commitId")


class AzureIteration(_AzureModel):
    id: int
    source_ref_commit: AzureCommitRef = Field(alias="sourceRefCommit")
    common_ref_commit: AzureCommitRef | None = Field(default=None, alias="commonRefCommit")
    target_ref_commit: AzureCommitRef | None = Field(default=None, alias="targetRefCommit")

    @property
    def base_commit(self) -> str | None:
        ref = self.common_ref_commit or self.target_ref_commit
        return ref.commit_id if ref else None


class AzureItem(_AzureModel):
    path: str
    is_folder: bool = Field(default=False, alias="isFolder")
    git_object_type: str | None = Field(default=None, alias="gitObjectType")


class AzureChangeEntry(_AzureModel):
    change_type: str = Field(alias="changeType")
    item: AzureItem
    original_path: str | None = Field(default=None, alias="originalPath")

    @property
    def change_kinds(self) -> set[str]:
        # changeType is a flags enum rendered as "edit, rename"
        return {part.strip() for part in self.change_type.split(",")}
