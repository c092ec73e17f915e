from pydantic import BaseModel, Field
from typing_extensions import Annotated

from projectsetup.config.inference import InferenceConfig
from projectsetup.config.llm import ChatConfig


class ProjectSetupConfig(BaseModel):
    chat_llm: Annotated[ChatConfig | None, Field(default=None)]
    inference: Annotated[InferenceConfig, Field(default_factory=InferenceConfig)]
    template_lang: Annotated[str | None, Field(default=None)]
    log_dir: Annotated[str, Field(description="Directory for LLM call logs", default='logs')]
