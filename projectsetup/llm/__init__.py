from .factory import ChatLLMFactory
from .types import ChatLLM
from .langchain import LangChainChatLLM
from .logger import (
    LLMLogger,
    LLMRequest,
    LLMResponse,
    LLMCall,
    SessionLog,
    initialize_llm_logger,
    get_logger,
    log_llm_call,
)
