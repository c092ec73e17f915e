from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated


class Role(str, Enum):
    System = "system"
    User = "user"
    Assistant = "assistant"


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Annotated[Role, Field()]
    content: Annotated[str, Field()]

    def to_dict(self) -> dict[str, str]:
        return {'role': self.role.value, 'content': self.content}


def system_message(content: str) -> Message:
    return Message(role=Role.System, content=content)


def user_message(content: str) -> Message:
    return Message(role=Role.User, content=content)


def assistant_message(content: str) -> Message:
    return Message(role=Role.Assistant, content=content)
