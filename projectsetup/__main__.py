import asyncio
import logging
import uuid
from argparse import ArgumentParser

import yaml

from projectsetup.assistants import ProjectSetupAssistant
from projectsetup.config import load_config
from projectsetup.inference import InferenceContext, InferenceExecutor
from projectsetup.llm import ChatLLMFactory, initialize_llm_logger
from projectsetup.schemas import Blueprint, TemplateDetails
from projectsetup.utils.commands import format_commands_block

logger = logging.getLogger(__name__)


def load_yaml(path: str) -> dict:
    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


async def run(
        config_path: str,
        blueprint_path: str,
        template_path: str,
        query: str,
        verbosity: int,
        error: str | None = None,
) -> list[str]:
    if not verbosity:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(level=level)
    if level > logging.DEBUG:
        logging.getLogger('openai').setLevel(logging.WARNING)
        logging.getLogger('httpx').setLevel(logging.WARNING)

    config = load_config(config_path)
    llm_logger = initialize_llm_logger(config.log_dir)
    chat_llm = ChatLLMFactory().get(config.chat_llm)
    executor = InferenceExecutor(config.inference, chat_llm)
    context = InferenceContext(agent_id=str(uuid.uuid4()))
    llm_logger.start_session(query, agent_id=context.agent_id)

    assistant = ProjectSetupAssistant(
        executor=executor,
        inference_context=context,
        query=query,
        blueprint=Blueprint.model_validate(load_yaml(blueprint_path)),
        template=TemplateDetails.model_validate(load_yaml(template_path)),
        lang=config.template_lang,
    )
    try:
        result = await assistant.generate_setup_commands()
        if error:
            result = await assistant.generate_setup_commands(error)
    finally:
        llm_logger.complete_session()
        log_file = llm_logger.dump_to_file()
        logger.info(f"LLM calls written to {log_file}")

    print(format_commands_block(result.commands))
    return result.commands


def main():
    parser = ArgumentParser('projectsetup')
    parser.add_argument('--config', required=True, help="Path to the configuration file")
    parser.add_argument('--blueprint', required=True, help="Path to the blueprint YAML/JSON file")
    parser.add_argument('--template', required=True, help="Path to the template details YAML/JSON file")
    parser.add_argument('--error', help="Output of a failed install, asks the model to revise its commands")
    parser.add_argument('-v', action='count', help="Verbosity level. -v for INFO, -vv for DEBUG")
    parser.add_argument('query', help="The user's project request")
    ns = parser.parse_args()
    asyncio.run(run(ns.config, ns.blueprint, ns.template, ns.query, ns.v, ns.error))


if __name__ == "__main__":
    main()
