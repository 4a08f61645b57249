import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from xlf_translator.api.routes import create_app
from xlf_translator.core.config import Settings


class FakeGenerator:
    def __init__(self, reply: str):
        self.reply = reply

    async def generate(self, prompt: str, max_tokens: int) -> str:
        return self.reply


class TestRoutes(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(create_app(Settings(claude_api_key=None, static_dir="/nonexistent")))

    def test_health(self):
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["status"], "healthy")
        self.assertEqual(body["service"], "xlf-translator")
        self.assertGreaterEqual(body["uptime"], 0)

    def test_health_timestamp_is_utc(self):
        self.assertTrue(self.client.get("/health").json()["timestamp"].endswith("Z"))

    def test_non_object_body_rejected(self):
        for path, service in [("/api/process-xlf", "process-xlf"), ("/api/generate-context", "generate-context")]:
            resp = self.client.post(path, json=["Hello"])
            self.assertEqual(resp.status_code, 400)
            body = resp.json()
            self.assertFalse(body["success"])
            self.assertEqual(body["service"], service)
            self.assertIn("JSON object", body["error"])

    def test_process_xlf_fallback(self):
        resp = self.client.post("/api/process-xlf", json={"chunkTexts": ["Hello world", ""], "targetLang": "fr"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["translations"], {"0": "[FR_TRANSLATION_0]", "1": ""})
        self.assertEqual(body["metadata"]["chunkInfo"], "1/1")

    def test_process_xlf_validation_error(self):
        resp = self.client.post("/api/process-xlf", json={"chunkTexts": [], "targetLang": "fr"})
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["service"], "process-xlf")
        self.assertIn("chunkTexts", body["error"])

    def test_process_xlf_missing_target_lang(self):
        resp = self.client.post("/api/process-xlf", json={"chunkTexts": ["Hello"]})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("targetLang", resp.json()["error"])

    def test_generate_context_fallback(self):
        resp = self.client.post("/api/generate-context", json={
            "sampleTexts": ["Click continue to proceed", "Click continue to proceed"],
            "targetLang": "de",
        })
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertIn("**CONTENT TYPE**", body["translationContext"])
        self.assertIn("**SPECIAL CONSIDERATIONS**: UI elements, interaction clarity", body["translationContext"])
        self.assertEqual(body["metadata"]["generationMethod"], "local")

    def test_generate_context_validation_error(self):
        resp = self.client.post("/api/generate-context", json={"sampleTexts": []})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["service"], "generate-context")

    def test_real_translation_through_api(self):
        app = create_app(Settings(claude_api_key="test-key"), FakeGenerator('{"0": "Hallo Welt"}'))
        resp = TestClient(app).post("/api/process-xlf", json={"chunkTexts": ["Hello world"], "targetLang": "de"})
        self.assertEqual(resp.json()["translations"], {"0": "Hallo Welt"})

    def test_body_size_limit(self):
        app = create_app(Settings(claude_api_key=None, max_body_mb=0))
        resp = TestClient(app).post("/api/process-xlf", json={"chunkTexts": ["Hello"], "targetLang": "fr"})
        self.assertEqual(resp.status_code, 413)

    def test_frontend_missing(self):
        resp = self.client.get("/some/page")
        self.assertEqual(resp.status_code, 404)


class TestFrontendRoutes(unittest.TestCase):
    def test_serves_index_for_unknown_paths(self):
        with tempfile.TemporaryDirectory() as static_dir:
            Path(static_dir, "index.html").write_text("<html>XLF</html>", encoding="utf-8")
            Path(static_dir, "app.js").write_text("console.log('xlf');", encoding="utf-8")
            client = TestClient(create_app(Settings(static_dir=static_dir)))

            self.assertIn("XLF", client.get("/translate/job").text)
            self.assertIn("console.log", client.get("/app.js").text)


if __name__ == '__main__':
    unittest.main()
