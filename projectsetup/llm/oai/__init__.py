from .chat import OpenAIChatLLM
