from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated


class InferenceContext(BaseModel):
    """Per-agent routing information passed through to the inference executor unchanged."""
    model_config = ConfigDict(frozen=True)

    agent_id: Annotated[str, Field(description="Identifier of the agent run issuing the requests")]
    user_model_overrides: Annotated[dict[str, str], Field(
        description="Model names chosen by the user, keyed by agent action name",
        default_factory=dict,
    )]

    def model_for(self, action_name: str) -> str | None:
        return self.user_model_overrides.get(action_name)
