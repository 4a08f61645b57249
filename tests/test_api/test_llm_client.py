import json
import unittest

import httpx

from xlf_translator.core.config import Settings
from xlf_translator.core.context_generator import ContextGenerator
from xlf_translator.core.llm_client import ClaudeClient
from xlf_translator.core.translator import XlfTranslator
from xlf_translator.exception.exceptions import ConfigurationError, UpstreamError


def make_client(handler, api_key="test-key"):
    return ClaudeClient(Settings(claude_api_key=api_key), transport=httpx.MockTransport(handler))


class TestClaudeClient(unittest.IsolatedAsyncioTestCase):
    async def test_sends_messages_request(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["headers"] = request.headers
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"content": [{"type": "text", "text": "Bonjour"}]})

        text = await make_client(handler).generate("Translate Hello", 1000)

        self.assertEqual(text, "Bonjour")
        self.assertEqual(captured["url"], "https://api.anthropic.com/v1/messages")
        self.assertEqual(captured["headers"]["x-api-key"], "test-key")
        self.assertEqual(captured["headers"]["anthropic-version"], "2023-06-01")
        self.assertEqual(captured["body"]["model"], "claude-sonnet-4-20250514")
        self.assertEqual(captured["body"]["max_tokens"], 1000)
        self.assertEqual(captured["body"]["messages"], [{"role": "user", "content": "Translate Hello"}])

    async def test_missing_api_key(self):
        def handler(request):
            raise AssertionError("no request expected")

        with self.assertRaises(ConfigurationError):
            await make_client(handler, api_key=None).generate("prompt", 10)

    async def test_error_status(self):
        client = make_client(lambda request: httpx.Response(529, text="overloaded"))
        with self.assertRaises(UpstreamError) as ctx:
            await client.generate("prompt", 10)
        self.assertIn("529", str(ctx.exception))
        self.assertIn("overloaded", str(ctx.exception))

    async def test_empty_content(self):
        client = make_client(lambda request: httpx.Response(200, json={"content": []}))
        with self.assertRaises(UpstreamError):
            await client.generate("prompt", 10)

    async def test_invalid_json_body(self):
        client = make_client(lambda request: httpx.Response(200, text="<html>gateway</html>"))
        with self.assertRaises(UpstreamError):
            await client.generate("prompt", 10)

    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(UpstreamError):
            await make_client(handler).generate("prompt", 10)

    async def test_non_string_text(self):
        for text in [{"0": "Bonjour"}, ["x"], 42]:
            client = make_client(lambda request, text=text: httpx.Response(
                200, json={"content": [{"type": "text", "text": text}]}))
            with self.assertRaises(UpstreamError):
                await client.generate("prompt", 10)


class TestMalformedReplyFallback(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        def handler(request):
            return httpx.Response(200, json={"content": [{"type": "text", "text": {"0": "Bonjour"}}]})

        self.client = make_client(handler)

    async def test_translation_falls_back(self):
        translator = XlfTranslator(self.client.settings, self.client)

        result = await translator.process_translation({"chunkTexts": ["Hello", ""], "targetLang": "fr"})

        self.assertTrue(result.success)
        self.assertEqual(result.translations, {"0": "[FR_TRANSLATION_0]", "1": ""})

    async def test_context_falls_back(self):
        context_generator = ContextGenerator(self.client.settings, self.client)

        result = await context_generator.generate_translation_context({"sampleTexts": ["Click next"]})

        self.assertTrue(result.success)
        self.assertEqual(result.metadata.generation_method, "local")
        self.assertIn("**DOMAIN**:", result.translation_context)


if __name__ == '__main__':
    unittest.main()
