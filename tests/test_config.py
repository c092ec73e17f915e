import os
import tempfile
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from projectsetup.config import AzureOpenAIChatConfig, ProjectSetupConfig, PROJECT_SETUP_ACTION, load_config, \
    validate_chat_config
from projectsetup.exceptions import ConfigError

CONFIG_YAML = """
chat_llm:
  type: azure_openai
  endpoint: https://example.openai.azure.com
  deployment: gpt-4.1
  api_version: "2024-10-21"
  api_key: ${PROJECT_SETUP_TEST_KEY}
  model: gpt-4.1
inference:
  actions:
    projectSetup:
      model: gpt-4.1
      regeneration_model: gpt-4.1-mini
      temperature: 0.1
log_dir: run-logs
"""


class ConfigTestCase(unittest.TestCase):
    def write_config(self, content: str) -> str:
        fd, path = tempfile.mkstemp(suffix=".yml")
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)
        self.addCleanup(os.remove, path)
        return path

    def test_defaults(self):
        config = ProjectSetupConfig()
        self.assertIsNone(config.chat_llm)
        action = config.inference.get_action(PROJECT_SETUP_ACTION)
        self.assertIsNotNone(action)
        self.assertIsNotNone(action.regeneration_model)
        self.assertEqual(config.log_dir, 'logs')

    def test_api_key_from_environment(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": "from-env"}):
            config = validate_chat_config({'type': 'openai', 'model': 'gpt-4.1'})
        self.assertEqual(config.api_key, "from-env")

    def test_unknown_backend_type(self):
        with self.assertRaises(ValidationError):
            validate_chat_config({'type': 'llama', 'model': 'x'})

    def test_load_config_substitutes_environment(self):
        path = self.write_config(CONFIG_YAML)
        with patch.dict(os.environ, {"PROJECT_SETUP_TEST_KEY": "secret"}):
            config = load_config(path)

        self.assertIsInstance(config.chat_llm, AzureOpenAIChatConfig)
        self.assertEqual(config.chat_llm.api_key, "secret")
        action = config.inference.get_action(PROJECT_SETUP_ACTION)
        self.assertEqual(action.regeneration_model, "gpt-4.1-mini")
        self.assertEqual(action.chat_params(), {'temperature': 0.1})
        self.assertEqual(config.log_dir, "run-logs")

    def test_load_invalid_config(self):
        path = self.write_config("inference:\n  actions:\n    projectSetup:\n      temperature: hot\n")
        with self.assertRaises(ConfigError):
            load_config(path)
