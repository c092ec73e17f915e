class ProjectSetupError(Exception):
    """Base exception for project setup errors"""
    def __init__(self, msg: str):
        self.msg = msg

    def __str__(self):
        return self.msg


class ConfigError(ProjectSetupError):
    pass


class LLMError(ProjectSetupError):
    pass


class NoChatLLMConfigError(LLMError):
    def __init__(self, msg: str | None = None):
        super().__init__(msg or "Can not find available Chat LLM Config")


class UnexpectedChatConfigError(LLMError):
    def __init__(self, config: object):
        self.config = config
        super().__init__(f"Unexpected Config: {config}")


class InferenceError(ProjectSetupError):
    pass


class UnknownActionError(InferenceError):
    """Raised when no inference settings exist for an agent action"""
    def __init__(self, action_name: str, available_actions: list[str]):
        self.action_name = action_name
        self.available_actions = available_actions
        super().__init__(
            f"Agent action '{action_name}' is not configured.\n"
            f"Available actions: {', '.join(available_actions)}"
        )


class InferenceTransportError(InferenceError):
    """Raised when the chat backend could not be reached or failed internally"""
    def __init__(self, action_name: str, model: str | None, cause: BaseException):
        self.action_name = action_name
        self.model = model
        self.cause = cause
        super().__init__(
            f"Inference for action '{action_name}' with model '{model or 'default'}' failed: {cause}"
        )
