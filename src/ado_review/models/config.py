from pydantic import BaseModel, Field, field_validator


class RepoConfig(BaseModel):
    exclude: list[str] = Field(default_factory=list)

    @field_validator("exclude", mode="before")
    @classmethod
    def split_string(cls, value):
        # `exclude: "*.md, *.lock"` is accepted as well as a YAML list
        if isinstance(value, str):
            return [p.strip() for p in value.split(",") if p.strip()]
        return value
