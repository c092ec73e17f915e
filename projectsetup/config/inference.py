from pydantic import BaseModel, Field
from typing_extensions import Annotated

PROJECT_SETUP_ACTION = "projectSetup"


class AgentActionConfig(BaseModel):
    """Model routing and sampling settings for one agent action."""
    model: Annotated[str | None, Field(
        description="Model used for this action. Falls back to the chat backend's model when omitted",
        default=None,
    )]
    regeneration_model: Annotated[str | None, Field(
        description="Alternate, cheaper model pinned when an action is regenerated after an error",
        default=None,
    )]
    temperature: Annotated[float | None, Field(
        description="Overrides the backend temperature for this action",
        default=None,
    )]
    max_tokens: Annotated[int | None, Field(
        description="Overrides the backend token limit for this action",
        default=None,
    )]

    def chat_params(self) -> dict:
        params = {}
        if self.temperature is not None:
            params['temperature'] = self.temperature
        if self.max_tokens is not None:
            params['max_tokens'] = self.max_tokens
        return params


def default_actions() -> dict[str, AgentActionConfig]:
    return {
        PROJECT_SETUP_ACTION: AgentActionConfig(
            regeneration_model="gpt-4.1-mini",
            temperature=0.2,
            max_tokens=2000,
        ),
    }


class InferenceConfig(BaseModel):
    actions: Annotated[dict[str, AgentActionConfig], Field(
        description="Inference settings keyed by agent action name",
        default_factory=default_actions,
    )]

    def get_action(self, action_name: str) -> AgentActionConfig | None:
        return self.actions.get(action_name)
