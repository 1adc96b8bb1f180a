"""Speech synthesis through the Gemini text-to-speech model.

The model answers with an inline audio part, usually raw 16-bit mono PCM
(``audio/L16;codec=pcm;rate=24000``). The payload is decoded into a WAV
container so the browser audio element can play it directly.
"""

import base64
import io
import logging
import re
import wave
from collections.abc import Callable

from google import genai
from google.genai import types

from banglamuse.config import get_settings
from banglamuse.llm import get_genai_client
from banglamuse.speech.playback import AudioClip

logger = logging.getLogger(__name__)

_RATE_PATTERN = re.compile(r"rate=(\d+)")


class EmptyAudioError(RuntimeError):
    """Raised when the TTS response carries no audio payload."""


def truncate_for_speech(text: str, max_chars: int) -> str:
    """Cut text to the TTS safety limit."""
    return text[:max_chars] if len(text) > max_chars else text


def _pcm_to_wav(pcm: bytes, sample_rate: int, channels: int = 1, sample_width: int = 2) -> bytes:
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav_file:
        wav_file.setnchannels(channels)
        wav_file.setsampwidth(sample_width)
        wav_file.setframerate(sample_rate)
        wav_file.writeframes(pcm)
    return buffer.getvalue()


def decode_audio_payload(
    data: bytes | str,
    mime_type: str | None = None,
    default_sample_rate: int = 24000,
) -> tuple[bytes, int]:
    """Decode an inline audio payload into WAV bytes.

    Args:
        data: Base64 text or raw bytes from the response part.
        mime_type: Mime type reported by the model, if any.
        default_sample_rate: Rate assumed when the mime type carries none.

    Returns:
        Tuple of (wav_bytes, sample_rate).

    Raises:
        EmptyAudioError: If the payload is empty.
    """
    raw = base64.b64decode(data) if isinstance(data, str) else data
    if not raw:
        raise EmptyAudioError("No audio data received")

    if raw[:4] == b"RIFF" and raw[8:12] == b"WAVE":
        with wave.open(io.BytesIO(raw), "rb") as wav_file:
            return raw, wav_file.getframerate()

    sample_rate = default_sample_rate
    if mime_type:
        match = _RATE_PATTERN.search(mime_type)
        if match:
            sample_rate = int(match.group(1))

    return _pcm_to_wav(raw, sample_rate), sample_rate


class SpeechSynthesizer:
    """Converts text into a playable AudioClip using the Gemini TTS model."""

    def __init__(
        self,
        client_factory: Callable[[], genai.Client] | None = None,
        model: str | None = None,
        voice: str | None = None,
        max_chars: int | None = None,
        sample_rate: int | None = None,
    ):
        settings = get_settings()
        self.client_factory = client_factory or get_genai_client
        self.model = model or settings.tts_model
        self.voice = voice or settings.tts_voice
        self.max_chars = max_chars or settings.tts_max_chars
        self.sample_rate = sample_rate or settings.tts_sample_rate

    def _config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=self.voice),
                ),
            ),
        )

    def _extract_clip(self, response: types.GenerateContentResponse) -> AudioClip:
        try:
            inline = response.candidates[0].content.parts[0].inline_data
        except (AttributeError, IndexError, TypeError):
            inline = None
        if inline is None or not inline.data:
            raise EmptyAudioError("No audio data received")

        wav, rate = decode_audio_payload(inline.data, inline.mime_type, self.sample_rate)
        return AudioClip(audio=wav, sample_rate=rate)

    async def asynthesize(self, text: str) -> AudioClip:
        """Synthesize speech for text.

        Args:
            text: Content to read aloud; truncated to ``max_chars``.

        Returns:
            Decoded AudioClip ready for playback.

        Raises:
            LLMUnavailableError: If no credential is configured.
            EmptyAudioError: If the response has no audio.
        """
        client = self.client_factory()
        content = truncate_for_speech(text, self.max_chars)
        logger.info(f"Synthesizing speech for {len(content)} characters with voice {self.voice}")

        response = await client.aio.models.generate_content(
            model=self.model,
            contents=content,
            config=self._config(),
        )
        return self._extract_clip(response)

    def synthesize(self, text: str) -> AudioClip:
        """Synchronous version of asynthesize."""
        client = self.client_factory()
        content = truncate_for_speech(text, self.max_chars)
        logger.info(f"Synthesizing speech for {len(content)} characters with voice {self.voice}")

        response = client.models.generate_content(
            model=self.model,
            contents=content,
            config=self._config(),
        )
        return self._extract_clip(response)
