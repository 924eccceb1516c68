import asyncio
import os
import sys
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

from openai import OpenAIError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.ai.config import load_ai_config  # noqa: E402
from app.ai.factory import get_text_generator  # noqa: E402
from app.ai.providers.openai_provider import OpenAIProvider  # noqa: E402
from app.ai.types import UpstreamError  # noqa: E402


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class TextGeneratorFactoryTests(unittest.TestCase):
    def test_openrouter_defaults(self):
        with patch.dict(os.environ, {"AI_PROVIDER": "openrouter", "OPENROUTER_API_KEY": "sk-or-test"}, clear=True):
            cfg = load_ai_config()
            generator = get_text_generator()
        self.assertEqual(cfg.base_url, "https://openrouter.ai/api/v1")
        self.assertEqual(cfg.model, "deepseek/deepseek-r1-0528:free")
        self.assertIsInstance(generator, OpenAIProvider)

    def test_missing_or_placeholder_key_disables_generator(self):
        for env in (
            {"AI_PROVIDER": "openrouter"},
            {"AI_PROVIDER": "openrouter", "OPENROUTER_API_KEY": "your_api_key_here"},
            {"AI_PROVIDER": "disabled", "OPENAI_API_KEY": "sk-test"},
            {"AI_PROVIDER": "unknown", "OPENAI_API_KEY": "sk-test"},
        ):
            with self.subTest(env=env), patch.dict(os.environ, env, clear=True):
                self.assertIsNone(get_text_generator())


class OpenAIProviderTests(unittest.TestCase):
    def setUp(self):
        self.provider = OpenAIProvider(model="test-model", api_key="sk-test", base_url="http://localhost:9/v1")

    def _generate(self, create_mock, **kwargs):
        with patch.object(self.provider._client.chat.completions, "create", create_mock):
            return asyncio.run(self.provider.generate("hello", **kwargs))

    def test_request_shape(self):
        create = AsyncMock(return_value=_completion("  hi  "))
        text = self._generate(create, system_prompt="be brief", temperature=0.5, max_tokens=10, json_mode=True)
        self.assertEqual(text, "  hi  ")
        kwargs = create.await_args.kwargs
        self.assertEqual(kwargs["model"], "test-model")
        self.assertEqual([m["role"] for m in kwargs["messages"]], ["system", "user"])
        self.assertEqual(kwargs["response_format"], {"type": "json_object"})
        self.assertEqual(kwargs["max_tokens"], 10)

    def test_errors_become_upstream_errors(self):
        with self.assertRaises(UpstreamError) as ctx:
            self._generate(AsyncMock(side_effect=OpenAIError("connection refused")))
        self.assertEqual(ctx.exception.code, "llm_unavailable")

        with self.assertRaises(UpstreamError) as ctx:
            self._generate(AsyncMock(return_value=_completion("   ")))
        self.assertEqual(ctx.exception.code, "empty_response")


if __name__ == "__main__":
    unittest.main()
