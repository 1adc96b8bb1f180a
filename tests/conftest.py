"""Pytest configuration and fixtures."""

import os

import pytest


def pytest_configure(config):
    """Set up test environment variables before tests run."""
    # No credential: every Gemini call goes through the offline path
    os.environ["GOOGLE_PROJECT_ID"] = ""
    os.environ.setdefault("GOOGLE_LOCATION", "us-central1")
    os.environ["FALLBACK_DELAY_SECONDS"] = "0"
    os.environ["HISTORY_FILE"] = os.path.join(
        str(config.rootpath), ".pytest_cache", "history.json"
    )


class FakeLLMFactory:
    """Callable returning a fake chat model and recording each call."""

    def __init__(self, responses: list[str]):
        self.responses = responses
        self.calls: list[dict] = []

    def __call__(self, temperature: float | None = None):
        from langchain_core.language_models.fake_chat_models import FakeListChatModel

        self.calls.append({"temperature": temperature})
        return FakeListChatModel(responses=self.responses)


class FailingLLMFactory:
    """Callable that fails like a missing credential."""

    def __init__(self):
        self.calls = 0

    def __call__(self, temperature: float | None = None):
        from banglamuse.llm import LLMUnavailableError

        self.calls += 1
        raise LLMUnavailableError("GOOGLE_PROJECT_ID is not configured")


class FakeSynthesizer:
    """Speech synthesizer returning a tiny WAV clip and counting requests."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[str] = []

    async def asynthesize(self, text: str):
        from banglamuse.speech import AudioClip, decode_audio_payload

        self.calls.append(text)
        if self.fail:
            raise RuntimeError("quota exceeded")
        wav, rate = decode_audio_payload(b"\x00\x00" * 240, "audio/L16;codec=pcm;rate=24000")
        return AudioClip(audio=wav, sample_rate=rate)


@pytest.fixture
def history_store(tmp_path):
    """Provide an empty history store backed by a temporary file."""
    from banglamuse.history import HistoryStore

    store = HistoryStore(tmp_path / "history.json")
    store.load()
    return store


@pytest.fixture
def make_studio(history_store):
    """Build a Studio wired to fakes."""
    from banglamuse.chains.content_generator import ContentGeneratorChain
    from banglamuse.chains.refiner import RefinerChain
    from banglamuse.studio import Studio

    def _make(
        generator_factory=None,
        refiner_factory=None,
        synthesizer=None,
    ):
        return Studio(
            history=history_store,
            generator=ContentGeneratorChain(
                llm_factory=generator_factory or FakeLLMFactory(["নতুন লেখা"])
            ),
            refiner=RefinerChain(llm_factory=refiner_factory or FakeLLMFactory(["পরিমার্জিত লেখা"])),
            synthesizer=synthesizer or FakeSynthesizer(),
            fallback_delay=0,
        )

    return _make


@pytest.fixture
def fakes():
    """Expose the fake collaborators to tests."""
    from types import SimpleNamespace

    return SimpleNamespace(
        LLM=FakeLLMFactory,
        FailingLLM=FailingLLMFactory,
        Synthesizer=FakeSynthesizer,
    )


@pytest.fixture
def studio_client(make_studio):
    """TestClient bound to a fake-wired studio.

    The lifespan is not entered; ``banglamuse.api.main.studio`` is patched so
    ``get_studio`` returns the fake-wired instance.
    """
    from unittest.mock import patch

    from fastapi.testclient import TestClient

    from banglamuse.api.main import app

    studio = make_studio()
    with patch("banglamuse.api.main.studio", studio):
        yield TestClient(app), studio
