"""Speech synthesis and playback."""

from banglamuse.speech.playback import AudioClip, AudioPlayback, PlaybackStateError
from banglamuse.speech.synthesizer import (
    EmptyAudioError,
    SpeechSynthesizer,
    decode_audio_payload,
    truncate_for_speech,
)

__all__ = [
    "AudioClip",
    "AudioPlayback",
    "EmptyAudioError",
    "PlaybackStateError",
    "SpeechSynthesizer",
    "decode_audio_payload",
    "truncate_for_speech",
]
