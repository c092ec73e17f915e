from .log import ConversationLog
from .message import Message, Role, system_message, user_message, assistant_message
