import logging

from pyaml_env import parse_config as parse_config_with_env
from pydantic import ValidationError

from projectsetup.exceptions import ConfigError
from .inference import AgentActionConfig, InferenceConfig, PROJECT_SETUP_ACTION
from .llm import ChatConfig, ChatLLMType, OpenAIChatConfig, AzureOpenAIChatConfig, DeepSeekChatConfig, \
    validate_chat_config
from .project_setup import ProjectSetupConfig

logger = logging.getLogger(__name__)


def load_config(config_path: str) -> ProjectSetupConfig:
    """Load a YAML config file, resolving ``${ENV_VAR}`` references."""
    with open(config_path, 'r', encoding='utf-8') as f:
        data = parse_config_with_env(data=f, tag=None)
    try:
        config = ProjectSetupConfig.model_validate(data or {})
    except ValidationError as e:
        raise ConfigError(f"Invalid config file '{config_path}':\n{e}") from e
    logger.debug(f"Loaded config: {config}")
    return config
