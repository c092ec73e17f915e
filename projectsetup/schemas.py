from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing_extensions import Annotated

from projectsetup.utils.commands import is_comment


class Blueprint(BaseModel):
    """What the generated app has to do. Fields beyond the known ones are kept and shown to the model."""
    model_config = ConfigDict(extra='allow')

    title: Annotated[str, Field(default='')]
    description: Annotated[str, Field(default='')]
    frameworks: Annotated[list[str], Field(
        description="Dependencies the blueprint requires to be installed",
        default_factory=list,
    )]

    def render(self) -> str:
        lines = []
        if self.title:
            lines.append(f"Title: {self.title}")
        if self.description:
            lines.append(f"Description: {self.description}")
        if self.frameworks:
            lines.append(f"Frameworks: {', '.join(self.frameworks)}")
        for key, value in (self.model_extra or {}).items():
            lines.append(f"{key}: {value}")
        return '\n'.join(lines)


class TemplateDetails(BaseModel):
    """The starting code template the setup commands are applied to."""
    name: Annotated[str, Field()]
    description: Annotated[str, Field(description="Human readable summary of the template", default='')]
    deps: Annotated[list[str], Field(
        description="Names of the dependencies already installed in the template",
        default_factory=list,
    )]


class SetupCommandsResult(BaseModel):
    commands: Annotated[list[str], Field(
        description="Installation commands in suggested execution order",
        default_factory=list,
    )]

    @field_validator('commands')
    @classmethod
    def _check_commands(cls, commands: list[str]) -> list[str]:
        for command in commands:
            if not command or command != command.strip():
                raise ValueError(f"Command must be non-empty and trimmed: {command!r}")
            if is_comment(command):
                raise ValueError(f"Command must not be a comment: {command!r}")
        return commands

    @classmethod
    def empty(cls) -> 'SetupCommandsResult':
        return cls(commands=[])
