from pydantic import BaseModel, ConfigDict, Field


class ReviewComment(BaseModel):
    model_config = ConfigDict(frozen=True)

    body: str
    path: str
    line: int = Field(ge=1)
