import asyncio
import logging

from projectsetup.config.inference import PROJECT_SETUP_ACTION
from projectsetup.conversation import assistant_message, system_message, user_message
from projectsetup.exceptions import InferenceTransportError
from projectsetup.inference import EmptyResult, InferenceContext, InferenceExecutor, TextResult, TransportFailure
from projectsetup.schemas import Blueprint, SetupCommandsResult, TemplateDetails
from projectsetup.template import TemplateEnvironment
from projectsetup.utils.commands import extract_commands
from .assistant import Assistant

logger = logging.getLogger(__name__)


class ProjectSetupAssistant(Assistant):
    """Suggests package installation commands for a blueprint on top of a starting template."""

    def __init__(
            self,
            *,
            executor: InferenceExecutor,
            inference_context: InferenceContext,
            query: str,
            blueprint: Blueprint,
            template: TemplateDetails,
            template_env: TemplateEnvironment | None = None,
            lang: str | None = None,
    ):
        self.template_env = template_env or TemplateEnvironment(package_name="projectsetup", default_lang=lang)
        self.lang = lang
        system_prompt = self.template_env.load_template('project_setup/system.jinja2', lang).render()
        super().__init__(executor, inference_context, system_message(system_prompt))
        self.save([
            user_message(self.template_env.load_template('project_setup/initial_request.jinja2', lang).render(
                query=query,
                blueprint=blueprint.render(),
                template_name=template.name,
                template_description=template.description,
                dependencies=template.deps,
                blueprint_dependencies=blueprint.frameworks,
            )),
        ])
        self.query = query
        self._lock = asyncio.Lock()

    async def generate_setup_commands(self, error: str | None = None) -> SetupCommandsResult:
        """
        Ask the model for setup commands, or for corrected ones after a failure.

        Calls on the same assistant are serialized so the conversation keeps
        alternating between user and assistant turns.

        Args:
            error: Output of a failed command run. When given, the model is asked to
                revise its previous suggestions and an alternate model is used.

        Returns:
            Extracted commands, empty when the model returned nothing usable

        Raises:
            InferenceTransportError: If the chat backend could not be reached
        """
        async with self._lock:
            return await self._generate(error)

    async def _generate(self, error: str | None) -> SetupCommandsResult:
        logger.info(f"Generating setup commands for query ({len(self.query)} chars): {self.query[:80]}")

        if error:
            logger.info(f"Regenerating setup commands after error: {error}")
            prompt = user_message(
                self.template_env.load_template('project_setup/regenerate.jinja2', self.lang).render(error=error))
            model_name = self._regeneration_model()
        else:
            prompt = user_message(self.template_env.load_template('project_setup/generate.jinja2', self.lang).render())
            model_name = None
        messages = self.save([prompt])

        result = await self.executor.execute(
            messages=messages,
            action_name=PROJECT_SETUP_ACTION,
            context=self.inference_context,
            model_name=model_name,
        )

        match result:
            case TransportFailure(cause=cause, model=model):
                logger.error(f"Error generating setup commands: {cause}")
                raise InferenceTransportError(PROJECT_SETUP_ACTION, model, cause) from cause
            case EmptyResult(reason="blank"):
                logger.info("Model returned empty text, no setup commands generated")
                return SetupCommandsResult.empty()
            case EmptyResult(payload_type=payload_type):
                logger.warning(f"Failed to generate setup commands, got {payload_type or 'no'} payload")
                return SetupCommandsResult.empty()
            case TextResult(content=content):
                logger.info(f"Generated setup commands: {content}")
                self.save([assistant_message(content)])
                return SetupCommandsResult(commands=extract_commands(content))

    def _regeneration_model(self) -> str | None:
        action = self.executor.config.get_action(PROJECT_SETUP_ACTION)
        if action is None or action.regeneration_model is None:
            logger.warning("No regeneration model configured, falling back to default routing")
            return None
        return action.regeneration_model
