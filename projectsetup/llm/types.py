from abc import ABC, abstractmethod

from openai import AsyncAzureOpenAI, AsyncOpenAI

# Type alias for OpenAI clients
AsyncOpenAIClient = AsyncAzureOpenAI | AsyncOpenAI


class ChatLLM(ABC):
    """Abstract base class for chat language models."""

    @abstractmethod
    async def chat(self, messages: list[dict], **params) -> str | None:
        """Send a chat completion request.

        Args:
            messages: List of message dictionaries with 'role' and 'content'
            **params: Additional parameters for the chat completion API.
                ``model`` overrides the backend's configured model.

        Returns:
            Generated response text, or None when the backend produced no text
        """
        pass
