from pydantic import BaseModel, ConfigDict, Field


class AssigneeRef(BaseModel):
    """Body of POST /tasks/{task_id}/assignees: the user to assign."""

    model_config = ConfigDict(extra="forbid")

    id: int = Field(gt=0)


class TaskRef(BaseModel):
    """Body of PUT /users/{user_id}/selection: the task to make active."""

    model_config = ConfigDict(extra="forbid")

    id: int = Field(gt=0)


class BalanceResult(BaseModel):
    # task_id -> user_id the task went to
    assigned: dict[int, int] = Field(default_factory=dict)
    # tasks whose assignment attempt failed
    failed: list[int] = Field(default_factory=list)
