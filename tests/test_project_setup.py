"""Behavioral tests for the project setup assistant.

The chat backend is replaced by an AsyncMock so the tests exercise the real
InferenceExecutor routing, the conversation protocol and command extraction.
"""

import asyncio
import unittest
from unittest.mock import AsyncMock

from projectsetup.assistants import ProjectSetupAssistant
from projectsetup.config import AgentActionConfig, InferenceConfig, PROJECT_SETUP_ACTION
from projectsetup.conversation import Role
from projectsetup.exceptions import InferenceTransportError
from projectsetup.inference import InferenceContext, InferenceExecutor
from projectsetup.llm.types import ChatLLM
from projectsetup.schemas import Blueprint, SetupCommandsResult, TemplateDetails

TWO_PACKAGES = "```bash\nbun add react-native-svg\nbun add react-native-linear-gradient\n```"


def create_blueprint() -> Blueprint:
    return Blueprint(
        title="Gradient Weather",
        description="A visually rich weather app using SVG icons and gradient backgrounds.",
        frameworks=["react-native-svg", "react-native-linear-gradient"],
    )


def create_template() -> TemplateDetails:
    return TemplateDetails(
        name="expo-starter",
        description="Expo managed workflow with TypeScript and expo-router.",
        deps=["react", "react-native", "expo-router"],
    )


class ProjectSetupAssistantTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.chat_llm = AsyncMock(spec=ChatLLM)
        self.config = InferenceConfig(actions={
            PROJECT_SETUP_ACTION: AgentActionConfig(model="smart-model", regeneration_model="fast-model"),
        })
        self.executor = InferenceExecutor(self.config, self.chat_llm)
        self.context = InferenceContext(agent_id="agent-1")
        self.assistant = ProjectSetupAssistant(
            executor=self.executor,
            inference_context=self.context,
            query="Build me a weather app with pretty gradients",
            blueprint=create_blueprint(),
            template=create_template(),
        )

    def sent_messages(self, call_index: int = -1) -> list[dict]:
        return self.chat_llm.chat.await_args_list[call_index].args[0]

    def sent_model(self, call_index: int = -1) -> str | None:
        return self.chat_llm.chat.await_args_list[call_index].kwargs.get('model')

    def test_initial_prompt(self):
        history = self.assistant.history
        self.assertEqual(len(history), 2)
        self.assertEqual(history[0].role, Role.System)
        self.assertEqual(history[1].role, Role.User)
        initial = history[1].content
        self.assertIn("Build me a weather app with pretty gradients", initial)
        self.assertIn("Gradient Weather", initial)
        self.assertIn("Expo managed workflow with TypeScript and expo-router.", initial)
        self.assertIn("- expo-router", initial)
        self.assertIn("- react-native-linear-gradient", initial)
        self.assertEqual(self.assistant.query, "Build me a weather app with pretty gradients")

    async def test_first_attempt_extracts_commands(self):
        self.chat_llm.chat.return_value = TWO_PACKAGES

        result = await self.assistant.generate_setup_commands()

        self.assertEqual(result, SetupCommandsResult(commands=[
            "bun add react-native-svg",
            "bun add react-native-linear-gradient",
        ]))
        self.assertEqual(self.sent_model(), "smart-model")
        history = self.assistant.history
        self.assertEqual([m.role for m in history], [Role.System, Role.User, Role.User, Role.Assistant])
        self.assertEqual(history[-1].content, TWO_PACKAGES)
        self.assertIn("code fence", history[2].content)
        self.assertNotIn("might not have worked", history[2].content)
        self.assertEqual(len(self.sent_messages()), 3)

    async def test_comment_only_response_is_empty(self):
        self.chat_llm.chat.return_value = "```bash\n# No additional dependencies needed\n```"

        result = await self.assistant.generate_setup_commands()

        self.assertEqual(result.commands, [])
        self.assertEqual(self.assistant.history[-1].role, Role.Assistant)

    async def test_absent_response_is_empty_without_assistant_turn(self):
        self.chat_llm.chat.return_value = None

        result = await self.assistant.generate_setup_commands()

        self.assertEqual(result, SetupCommandsResult.empty())
        self.assertEqual(len(self.assistant.history), 3)
        self.assertEqual(self.assistant.history[-1].role, Role.User)

    async def test_non_text_and_blank_responses_are_empty(self):
        for payload in [{"commands": ["bun add x"]}, 42, ""]:
            with self.subTest(payload=payload):
                self.chat_llm.chat.return_value = payload
                before = len(self.assistant.history)
                result = await self.assistant.generate_setup_commands()
                self.assertEqual(result.commands, [])
                self.assertEqual(len(self.assistant.history), before + 1)

    async def test_whitespace_response_is_kept_as_assistant_turn(self):
        self.chat_llm.chat.return_value = "   \n"

        result = await self.assistant.generate_setup_commands()

        self.assertEqual(result.commands, [])
        self.assertEqual([m.role for m in self.assistant.history], [Role.System, Role.User, Role.User, Role.Assistant])
        self.assertEqual(self.assistant.history[-1].content, "   \n")

    async def test_regeneration_quotes_error_and_uses_alternate_model(self):
        self.chat_llm.chat.return_value = "```bash\nbun add react-native-ui-lib@9\n```"
        await self.assistant.generate_setup_commands()

        error = "package react-native-ui-lib@9 not found"
        self.chat_llm.chat.return_value = "```bash\nbun add react-native-ui-lib\n```"
        result = await self.assistant.generate_setup_commands(error)

        self.assertEqual(result.commands, ["bun add react-native-ui-lib"])
        self.assertEqual(self.sent_model(0), "smart-model")
        self.assertEqual(self.sent_model(1), "fast-model")
        retry_turn = self.assistant.history[4]
        self.assertEqual(retry_turn.role, Role.User)
        self.assertIn(error, retry_turn.content)
        self.assertIn("different version", retry_turn.content)
        # The second dispatch carries the whole first exchange.
        sent = self.sent_messages(1)
        self.assertEqual(len(sent), 5)
        self.assertEqual(sent[3], {'role': 'assistant', 'content': "```bash\nbun add react-native-ui-lib@9\n```"})
        self.assertEqual(sent[4]['content'], retry_turn.content)

    async def test_error_text_is_quoted_verbatim(self):
        self.chat_llm.chat.return_value = "```bash\n```"
        error = "error: {{ not a template }}\n  at line 3 <script>&amp;"
        await self.assistant.generate_setup_commands(error)
        self.assertIn(error, self.assistant.history[2].content)

    async def test_user_model_override_applies_to_first_attempt_only(self):
        context = InferenceContext(agent_id="agent-2", user_model_overrides={PROJECT_SETUP_ACTION: "user-model"})
        assistant = ProjectSetupAssistant(
            executor=self.executor,
            inference_context=context,
            query="q",
            blueprint=create_blueprint(),
            template=create_template(),
        )
        self.chat_llm.chat.return_value = "```bash\nbun add a\n```"
        await assistant.generate_setup_commands()
        await assistant.generate_setup_commands("bun add a failed")
        self.assertEqual(self.sent_model(0), "user-model")
        self.assertEqual(self.sent_model(1), "fast-model")

    async def test_transport_failure_is_raised(self):
        cause = ConnectionError("backend unreachable")
        self.chat_llm.chat.side_effect = cause

        with self.assertRaises(InferenceTransportError) as ctx:
            await self.assistant.generate_setup_commands("previous install failed")

        self.assertIs(ctx.exception.__cause__, cause)
        self.assertEqual(ctx.exception.action_name, PROJECT_SETUP_ACTION)
        self.assertEqual(ctx.exception.model, "fast-model")
        # The user turn stays committed, no assistant turn is recorded.
        self.assertEqual(len(self.assistant.history), 3)
        self.assertEqual(self.assistant.history[-1].role, Role.User)

    async def test_retry_after_transport_failure(self):
        self.chat_llm.chat.side_effect = [TimeoutError("slow"), TWO_PACKAGES]

        with self.assertRaises(InferenceTransportError):
            await self.assistant.generate_setup_commands()
        result = await self.assistant.generate_setup_commands()

        self.assertEqual(len(result.commands), 2)
        self.assertEqual([m.role for m in self.assistant.history],
                         [Role.System, Role.User, Role.User, Role.User, Role.Assistant])

    async def test_cancelled_dispatch_leaves_dangling_user_turn(self):
        never = asyncio.Event()

        async def hang(messages, **params):
            await never.wait()

        self.chat_llm.chat.side_effect = hang
        task = asyncio.create_task(self.assistant.generate_setup_commands())
        while not self.chat_llm.chat.call_count:
            await asyncio.sleep(0)
        task.cancel()

        with self.assertRaises(asyncio.CancelledError):
            await task
        self.assertEqual(len(self.assistant.history), 3)
        self.assertEqual(self.assistant.history[-1].role, Role.User)

    async def test_concurrent_calls_are_serialized(self):
        replies = iter(["```bash\nbun add first\n```", "```bash\nbun add second\n```"])

        async def reply(messages, **params):
            await asyncio.sleep(0.01)
            return next(replies)

        self.chat_llm.chat.side_effect = reply
        first, second = await asyncio.gather(
            self.assistant.generate_setup_commands(),
            self.assistant.generate_setup_commands("bun add first failed"),
        )

        self.assertEqual(first.commands, ["bun add first"])
        self.assertEqual(second.commands, ["bun add second"])
        roles = [m.role for m in self.assistant.history[2:]]
        self.assertEqual(roles, [Role.User, Role.Assistant, Role.User, Role.Assistant])
        self.assertEqual(len(self.sent_messages(1)), 5)

    async def test_history_only_grows(self):
        self.chat_llm.chat.side_effect = [TWO_PACKAGES, None, "```bash\nbun add x\n```"]
        snapshots = [self.assistant.history]
        await self.assistant.generate_setup_commands()
        snapshots.append(self.assistant.history)
        await self.assistant.generate_setup_commands("oops")
        snapshots.append(self.assistant.history)
        await self.assistant.generate_setup_commands("oops again")
        snapshots.append(self.assistant.history)

        for previous, current in zip(snapshots, snapshots[1:]):
            self.assertGreater(len(current), len(previous))
            self.assertEqual(current[:len(previous)], previous)
            self.assertEqual(current[0], snapshots[0][0])
