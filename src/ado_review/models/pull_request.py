from pydantic import BaseModel, ConfigDict, field_validator


class PullRequestContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    project_id: str
    repository_id: str
    pull_request_id: int
    title: str
    description: str = ""

    @field_validator("description", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return value or ""
