from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

MessageKind = Literal["login", "update"]


class ClientMessageOut(BaseModel):
    """
    Message pushed to WebSocket clients.

    Serialized with camelCase keys:
      {"kind": "update", "userId": 7, "userName": "...", "taskId": 11, "taskDescription": "..."}
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    kind: MessageKind
    user_id: int
    user_name: str
    task_id: int
    task_description: str

    def wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
