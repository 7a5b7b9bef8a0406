# tests/test_gemini_client.py

"""Tests for GeminiClient request building and error mapping."""

import json
import unittest

import httpx

from src.services.gemini_client import GeminiClient, GeminiError, _redact_key


def _answer(text: str) -> dict[str, object]:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestGeminiClient(unittest.IsolatedAsyncioTestCase):
    """GeminiClient.generate against a mocked transport."""

    def _client(self, handler, api_key: str = "secret-key") -> GeminiClient:
        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(handler)
        )
        self.addAsyncCleanup(http_client.aclose)
        return GeminiClient(
            api_key=api_key, model="gemini-test", http_client=http_client
        )

    async def test_returns_first_candidate_text(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_answer('{"keywords": []}'))

        text = await self._client(handler).generate("hello")

        self.assertEqual(text, '{"keywords": []}')
        self.assertEqual(len(seen), 1)
        request = seen[0]
        self.assertEqual(request.method, "POST")
        self.assertTrue(
            request.url.path.endswith("/models/gemini-test:generateContent")
        )
        self.assertEqual(request.url.params["key"], "secret-key")
        body = json.loads(request.content)
        self.assertEqual(body["contents"][0]["parts"][0]["text"], "hello")

    async def test_http_error_status_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, text="quota exceeded")

        with self.assertRaises(GeminiError) as ctx:
            await self._client(handler).generate("hello")
        self.assertIn("429", str(ctx.exception))

    async def test_transport_error_raises_without_key(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError(f"cannot reach {request.url}")

        with self.assertRaises(GeminiError) as ctx:
            await self._client(handler).generate("hello")
        self.assertNotIn("secret-key", str(ctx.exception))

    async def test_unexpected_shape_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"candidates": []})

        with self.assertRaises(GeminiError):
            await self._client(handler).generate("hello")

    async def test_missing_key_makes_no_request(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=_answer("x"))

        client = self._client(handler, api_key="  ")
        self.assertFalse(client.configured)
        with self.assertRaises(GeminiError):
            await client.generate("hello")
        self.assertEqual(calls, [])


class TestRedactKey(unittest.TestCase):

    def test_key_value_hidden(self) -> None:
        self.assertEqual(
            _redact_key("https://x/y?key=abc123&alt=json"),
            "https://x/y?key=REDACTED&alt=json",
        )


if __name__ == "__main__":
    unittest.main()
