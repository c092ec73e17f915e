from .assistant import Assistant
from .project_setup import ProjectSetupAssistant
