from .assistants import Assistant, ProjectSetupAssistant
from .conversation import ConversationLog, Message, Role
from .inference import InferenceContext, InferenceExecutor
from .schemas import Blueprint, SetupCommandsResult, TemplateDetails
from .utils.commands import extract_commands
