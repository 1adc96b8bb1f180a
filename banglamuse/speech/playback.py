"""Single-handle audio playback tracking.

The browser plays the clip; the server keeps the one active handle so that a
second "read aloud" press stops playback instead of starting a new request.
"""

import logging
import time
from uuid import uuid4

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class PlaybackStateError(RuntimeError):
    """Raised when stopping a clip that is no longer playing."""


class AudioClip(BaseModel):
    """A decoded, playable audio clip."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    audio: bytes = Field(repr=False)
    mime_type: str = "audio/wav"
    sample_rate: int = 24000
    created_at: float = Field(default_factory=time.time)
    stopped: bool = False

    def stop(self) -> None:
        """Stop the clip.

        Raises:
            PlaybackStateError: If the clip has already stopped or ended.
        """
        if self.stopped:
            raise PlaybackStateError(f"Clip {self.id} is not playing")
        self.stopped = True


class AudioPlayback:
    """Holds at most one active AudioClip."""

    def __init__(self) -> None:
        self._current: AudioClip | None = None
        self.is_playing = False

    @property
    def current(self) -> AudioClip | None:
        return self._current

    def start(self, clip: AudioClip) -> None:
        """Start playing a clip, discarding any prior one."""
        self.stop()
        self._current = clip
        self.is_playing = True
        logger.info(f"Started playback of clip {clip.id}")

    def stop(self) -> None:
        """Stop and discard the active clip, if any."""
        if self._current is not None:
            try:
                self._current.stop()
            except PlaybackStateError:
                # Already ended on the client
                pass
            self._current = None
        self.is_playing = False

    def finish(self, clip_id: str) -> bool:
        """Mark the active clip as ended.

        Args:
            clip_id: Id of the clip the client finished playing.

        Returns:
            True if clip_id was the active clip, False otherwise.
        """
        if self._current is None or self._current.id != clip_id:
            return False
        self._current.stopped = True
        self.is_playing = False
        return True

    def get_clip(self, clip_id: str) -> AudioClip | None:
        """Return the active clip if it has the given id."""
        if self._current is not None and self._current.id == clip_id:
            return self._current
        return None
