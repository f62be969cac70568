import unittest

from skycast.ollama_client import OllamaError
from skycast.scene import SceneRequest, _strip_markdown_fences, build_scene_messages, build_scene_prompt, generate_scene


class FakeOllama:
    model = "tiny"

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.messages = None

    def chat(self, messages, *, options=None):
        self.messages = messages
        if self.error:
            raise self.error
        return self.reply


def _request():
    return SceneRequest(location_display_name="Kyoto, JP", current_description="light rain", current_temperature=18)


class TestScenePrompt(unittest.TestCase):
    def test_prompt_mentions_only_the_narrow_inputs(self):
        prompt = build_scene_prompt(_request())
        self.assertIn('"light rain"', prompt)
        self.assertIn('"Kyoto, JP"', prompt)
        self.assertIn("18°C", prompt)

    def test_messages_have_system_then_user(self):
        messages = build_scene_messages(_request())
        self.assertEqual([m["role"] for m in messages], ["system", "user"])
        self.assertEqual(messages[1]["content"], build_scene_prompt(_request()))

    def test_strip_markdown_fences(self):
        self.assertEqual(_strip_markdown_fences("```text\nA wet street.\n```"), "A wet street.")
        self.assertEqual(_strip_markdown_fences("  plain  "), "plain")
        self.assertEqual(_strip_markdown_fences(""), "")


class TestGenerateScene(unittest.TestCase):
    def test_success(self):
        client = FakeOllama(reply="Lanterns glow along a rain-slick alley.")
        result = generate_scene(_request(), client)

        self.assertEqual(result.description, "Lanterns glow along a rain-slick alley.")
        self.assertEqual(result.reliability, "Experimental")
        self.assertEqual(result.model_used, "tiny")

    def test_model_failure_is_unavailable(self):
        client = FakeOllama(error=OllamaError("boom"))
        with self.assertLogs("skycast.scene", level="WARNING"):
            result = generate_scene(_request(), client)
        self.assertIsNone(result.description)
        self.assertEqual(result.reliability, "Unavailable")
        self.assertTrue(result.prompt)

    def test_unexpected_error_is_unavailable(self):
        client = FakeOllama(error=KeyError("message"))
        with self.assertLogs("skycast.scene", level="ERROR"):
            result = generate_scene(_request(), client)
        self.assertEqual(result.reliability, "Unavailable")

    def test_empty_reply_is_unavailable(self):
        with self.assertLogs("skycast.scene", level="WARNING"):
            result = generate_scene(_request(), FakeOllama(reply="   "))
        self.assertIsNone(result.description)
        self.assertEqual(result.reliability, "Unavailable")

    def test_disabled_skips_the_model(self):
        client = FakeOllama(reply="never used")
        result = generate_scene(_request(), client, enabled=False)
        self.assertEqual(result.reliability, "Unavailable")
        self.assertIsNone(client.messages)


if __name__ == "__main__":
    unittest.main()
