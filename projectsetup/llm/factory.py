from projectsetup.config.llm import ChatConfig, AzureOpenAIChatConfig, OpenAIChatConfig, DeepSeekChatConfig
from projectsetup.exceptions import NoChatLLMConfigError, UnexpectedChatConfigError
from .types import ChatLLM


class ChatLLMFactory:
    def __init__(self, default: ChatLLM | None = None):
        self.default = default

    @classmethod
    def build(cls, config: ChatConfig) -> ChatLLM:
        if isinstance(config, AzureOpenAIChatConfig | OpenAIChatConfig | DeepSeekChatConfig):
            from .oai import OpenAIChatLLM
            return OpenAIChatLLM.from_config(config)
        raise UnexpectedChatConfigError(config)

    def get(self, config: ChatConfig | None = None) -> ChatLLM:
        if config:
            return self.build(config)
        if self.default:
            return self.default
        raise NoChatLLMConfigError()
