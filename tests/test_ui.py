"""Tests for the UI helpers and the API client."""

from unittest.mock import MagicMock, patch

import httpx
import pytest


class TestUIUtils:
    """Test UI helper functions."""

    def test_format_category_bn(self):
        """Category ids map to Bengali labels."""
        from banglamuse.ui.utils import format_category_bn

        assert format_category_bn("article") == "প্রবন্ধ"
        assert format_category_bn("fiction") == "গল্প"
        assert format_category_bn("poetry") == "কবিতা"
        assert format_category_bn("memoir") == "স্মৃতিচারণ"
        assert format_category_bn("UNKNOWN") == "UNKNOWN"

    def test_word_count(self):
        """Words are counted on whitespace."""
        from banglamuse.ui.utils import word_count

        assert word_count("") == 0
        assert word_count("   \n ") == 0
        assert word_count("আমার সোনার বাংলা") == 3
        assert word_count("এক\nদুই\tতিন  চার") == 4

    def test_truncate_text(self):
        """Test text truncation utility."""
        from banglamuse.ui.utils import truncate_text

        assert truncate_text("ছোট লেখা", max_length=50) == "ছোট লেখা"

        truncated = truncate_text("অনেক লম্বা লেখা " * 10, max_length=20)
        assert len(truncated) == 23
        assert truncated.endswith("...")

    def test_format_timestamp(self):
        """Millisecond timestamps render as dates."""
        from banglamuse.ui.utils import format_timestamp

        formatted = format_timestamp(1_700_000_000_000)

        assert len(formatted) == 10
        assert formatted.startswith("2023-11-1")

    def test_wav_duration_from_header(self):
        """Clip length is frames over sample rate."""
        from banglamuse.speech.synthesizer import decode_audio_payload
        from banglamuse.ui.utils import wav_duration

        # 1.5 seconds of 16-bit mono silence at 24 kHz
        wav, _ = decode_audio_payload(b"\x00\x00" * 36000, mime_type="audio/L16;rate=24000")

        assert wav_duration(wav) == pytest.approx(1.5)

    def test_wav_duration_rejects_non_wav(self):
        import wave

        from banglamuse.ui.utils import wav_duration

        with pytest.raises(wave.Error):
            wav_duration(b"not a wav file at all")


class TestStudioStateModel:
    """Test the shared state model."""

    def test_defaults(self):
        from banglamuse.state import StudioState

        state = StudioState()

        assert state.selected_category == "article"
        assert state.length == "medium"
        assert state.generated_content == ""
        assert state.error_message is None
        assert not any(
            [state.is_generating, state.is_refining, state.is_generating_audio, state.is_playing_audio]
        )

    def test_round_trips_through_json(self):
        """The Streamlit client rebuilds state from API JSON."""
        from banglamuse.state import StudioState

        state = StudioState(topic="নদী", generated_content="লেখা", is_playing_audio=True)

        assert StudioState.model_validate(state.model_dump(mode="json")) == state


class TestAPIClient:
    """Test API client."""

    def test_api_client_init(self):
        from banglamuse.ui.api_client import APIClient

        client = APIClient(base_url="http://localhost:8000")

        assert client.base_url == "http://localhost:8000"
        assert client.timeout == 120.0

    def test_api_client_default_url(self, monkeypatch):
        from banglamuse.ui.api_client import APIClient

        monkeypatch.delenv("API_URL", raising=False)

        assert APIClient().base_url == "http://localhost:8000"

    def test_api_client_url_from_env(self, monkeypatch):
        from banglamuse.ui.api_client import APIClient

        monkeypatch.setenv("API_URL", "http://api:9000")

        assert APIClient().base_url == "http://api:9000"

    def test_generate_posts_form_values(self):
        """generate() sends the inputs as JSON and returns the state."""
        from banglamuse.ui.api_client import APIClient

        with patch("banglamuse.ui.api_client.httpx.Client") as mock_cls:
            http = mock_cls.return_value.__enter__.return_value
            http.request.return_value = MagicMock(json=lambda: {"generated_content": "লেখা"})

            result = APIClient(base_url="http://api").generate(
                "নদী", category="poetry", length="long", creativity=0.2
            )

        assert result == {"generated_content": "লেখা"}
        http.request.assert_called_once_with(
            "POST",
            "http://api/generate",
            json={
                "topic": "নদী",
                "category": "poetry",
                "style_sample": "",
                "length": "long",
                "creativity": 0.2,
            },
        )

    def test_get_audio_returns_bytes(self):
        from banglamuse.ui.api_client import APIClient

        with patch("banglamuse.ui.api_client.httpx.Client") as mock_cls:
            http = mock_cls.return_value.__enter__.return_value
            http.request.return_value = MagicMock(content=b"RIFF....")

            audio = APIClient(base_url="http://api").get_audio("abc")

        assert audio == b"RIFF...."
        http.request.assert_called_once_with("GET", "http://api/speech/abc", json=None)

    def test_speech_ended_posts_clip_id(self):
        """Clip completion is reported with the clip id."""
        from banglamuse.ui.api_client import APIClient

        with patch("banglamuse.ui.api_client.httpx.Client") as mock_cls:
            http = mock_cls.return_value.__enter__.return_value
            http.request.return_value = MagicMock(json=lambda: {"is_playing_audio": False})

            state = APIClient(base_url="http://api").speech_ended("abc")

        assert state == {"is_playing_audio": False}
        http.request.assert_called_once_with(
            "POST", "http://api/speech/ended", json={"clip_id": "abc"}
        )

    def test_stop_speech_posts(self):
        from banglamuse.ui.api_client import APIClient

        with patch("banglamuse.ui.api_client.httpx.Client") as mock_cls:
            http = mock_cls.return_value.__enter__.return_value
            http.request.return_value = MagicMock(json=lambda: {"is_playing_audio": False})

            APIClient(base_url="http://api").stop_speech()

        http.request.assert_called_once_with("POST", "http://api/speech/stop", json=None)

    def test_http_errors_propagate(self):
        """Non-2xx responses raise HTTPStatusError."""
        from banglamuse.ui.api_client import APIClient

        with patch("banglamuse.ui.api_client.httpx.Client") as mock_cls:
            http = mock_cls.return_value.__enter__.return_value
            response = MagicMock()
            response.raise_for_status.side_effect = httpx.HTTPStatusError(
                "conflict", request=MagicMock(), response=MagicMock(status_code=409)
            )
            http.request.return_value = response

            with pytest.raises(httpx.HTTPStatusError):
                APIClient(base_url="http://api").toggle_speech()

    def test_health_check_unreachable(self):
        """Connection errors report unhealthy instead of raising."""
        from banglamuse.ui.api_client import APIClient

        with patch("banglamuse.ui.api_client.httpx.Client") as mock_cls:
            http = mock_cls.return_value.__enter__.return_value
            http.get.side_effect = httpx.ConnectError("refused")

            assert APIClient(base_url="http://api").health_check() is False
