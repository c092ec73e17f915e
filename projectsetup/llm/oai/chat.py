from projectsetup.config.llm import AzureOpenAIChatConfig, OpenAIChatConfig, DeepSeekChatConfig
from projectsetup.llm.types import AsyncOpenAIClient, ChatLLM
from openai import AsyncAzureOpenAI, AsyncOpenAI


class OpenAIChatLLM(ChatLLM):
    def __init__(
            self,
            client: AsyncOpenAIClient,
            model: str,
            *,
            chat_params: dict | None = None,
    ):
        self.client = client
        self.model = model
        self.chat_params: dict = chat_params or {}

    @classmethod
    def from_config(cls, config: AzureOpenAIChatConfig | OpenAIChatConfig | DeepSeekChatConfig) -> 'OpenAIChatLLM':
        if isinstance(config, AzureOpenAIChatConfig):
            client = AsyncAzureOpenAI(
                azure_endpoint=config.endpoint,
                azure_deployment=config.deployment,
                api_version=config.api_version,
                api_key=config.api_key,
                timeout=config.timeout,
            )
        else:
            client = AsyncOpenAI(
                base_url=config.endpoint,
                api_key=config.api_key,
                timeout=config.timeout,
            )
        return cls(client, config.model, chat_params=config.chat_params())

    async def chat(self, messages: list[dict], **params) -> str | None:
        """
        Send a chat completion request to OpenAI compatible endpoints

        Args:
            messages: List of message dictionaries with 'role' and 'content'
            **params: Additional parameters for the chat completion API

        Returns:
            Content of the first choice
        """
        model = params.pop('model', None) or self.model
        # Newer OpenAI models only accept max_completion_tokens
        if 'max_tokens' in params and 'max_completion_tokens' in self.chat_params:
            params['max_completion_tokens'] = params.pop('max_tokens')
        resp = await self.client.chat.completions.create(
            messages=messages,
            model=model,
            **{**self.chat_params, **params},
        )
        if not resp.choices:
            return None
        return resp.choices[0].message.content
