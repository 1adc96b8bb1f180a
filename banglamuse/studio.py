"""Writing studio: owns the editing state and runs every user operation.

Each operation is an independent request/response round trip gated by its
own in-flight flag. Operations of different kinds are not mutually exclusive.
"""

import asyncio
import logging
import time

from banglamuse.categories import CategoryId, LengthOption
from banglamuse.chains.content_generator import ContentGeneratorChain, GenerationRequest
from banglamuse.chains.fallback import get_fallback_text
from banglamuse.chains.refiner import RefineAction, RefinerChain
from banglamuse.config import get_settings
from banglamuse.history import HistoryItem, HistoryStore
from banglamuse.speech.playback import AudioClip, AudioPlayback
from banglamuse.speech.synthesizer import SpeechSynthesizer
from banglamuse.state import StudioState

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "অনুগ্রহ করে আপনার আইডিয়া বা বিষয় লিখুন।"
REFINE_ERROR_MESSAGE = "পরিবর্তন করা সম্ভব হয়নি। আবার চেষ্টা করুন।"
SPEECH_ERROR_MESSAGE = "অডিও জেনারেট করা সম্ভব হয়নি।"


class OperationInProgressError(RuntimeError):
    """Raised when an operation is issued while the same kind is in flight."""

    def __init__(self, operation: str):
        super().__init__(f"{operation} is already in progress")
        self.operation = operation


class Studio:
    """Coordinates generation, refinement, speech and history."""

    def __init__(
        self,
        history: HistoryStore,
        generator: ContentGeneratorChain | None = None,
        refiner: RefinerChain | None = None,
        synthesizer: SpeechSynthesizer | None = None,
        playback: AudioPlayback | None = None,
        fallback_delay: float | None = None,
    ):
        """Initialize the studio.

        Args:
            history: Loaded history store.
            generator: Content generation chain.
            refiner: Refinement chain.
            synthesizer: Speech synthesizer.
            playback: Playback handle tracker.
            fallback_delay: Seconds to wait before showing fallback text.
        """
        settings = get_settings()
        self.history = history
        self.generator = generator or ContentGeneratorChain()
        self.refiner = refiner or RefinerChain()
        self.synthesizer = synthesizer or SpeechSynthesizer()
        self.playback = playback or AudioPlayback()
        self.fallback_delay = (
            fallback_delay if fallback_delay is not None else settings.fallback_delay_seconds
        )
        self.state = StudioState(creativity=settings.llm_temperature)

    # ---- inputs ----

    def update_inputs(
        self,
        category: CategoryId | str | None = None,
        topic: str | None = None,
        style_sample: str | None = None,
        length: LengthOption | str | None = None,
        creativity: float | None = None,
    ) -> StudioState:
        """Record form inputs. None leaves a field unchanged."""
        if category is not None:
            self.state.selected_category = CategoryId(category)
        if topic is not None:
            self.state.topic = topic
        if style_sample is not None:
            self.state.style_sample = style_sample
        if length is not None:
            self.state.length = LengthOption(length)
        if creativity is not None:
            self.state.creativity = min(max(float(creativity), 0.0), 1.0)
        return self.state

    # ---- generation ----

    async def generate(self, **inputs) -> StudioState:
        """Generate new content from the current inputs.

        Keyword arguments are passed to ``update_inputs`` first. A blank topic
        sets the validation message and issues no request. Any failure is
        answered with the category's fallback text, which is not recorded in
        history.

        Raises:
            OperationInProgressError: If a generation is already running.
        """
        if self.state.is_generating:
            raise OperationInProgressError("generation")

        self.update_inputs(**inputs)
        if not self.state.topic.strip():
            self.state.error_message = VALIDATION_MESSAGE
            return self.state

        request = GenerationRequest(
            category=self.state.selected_category,
            topic=self.state.topic,
            style_sample=self.state.style_sample,
            length=self.state.length,
            creativity=self.state.creativity,
        )

        self.state.is_generating = True
        self.state.error_message = None
        self.state.generated_content = ""
        self.state.show_style_badge = request.has_style
        self.stop_audio()

        try:
            text = await self.generator.agenerate(request)
        except Exception as e:
            logger.warning(f"Generation failed, using fallback text: {e}")
            fallback = get_fallback_text(request.category, request.topic, request.has_style)
            await asyncio.sleep(self.fallback_delay)
            self.state.generated_content = fallback
        else:
            self.state.generated_content = text
            self._record(request.category, request.topic, text)
        finally:
            self.state.is_generating = False

        return self.state

    # ---- refinement ----

    async def refine(self, action: RefineAction | str) -> StudioState:
        """Rewrite the current content. No-op without content.

        Raises:
            OperationInProgressError: If a refinement is already running.
        """
        action = RefineAction(action)
        if not self.state.generated_content:
            return self.state
        if self.state.is_refining:
            raise OperationInProgressError("refinement")

        self.state.is_refining = True
        self.state.error_message = None
        try:
            text = await self.refiner.arefine(self.state.generated_content, action)
        except Exception:
            logger.exception(f"Refinement '{action.value}' failed")
            self.state.error_message = REFINE_ERROR_MESSAGE
        else:
            self.state.generated_content = text
            self._record(
                self.state.selected_category,
                f"{self.state.topic} ({action.value})",
                text,
            )
        finally:
            self.state.is_refining = False

        return self.state

    # ---- speech ----

    async def toggle_speech(self) -> StudioState:
        """Read the content aloud, or stop playback if audio is playing.

        Raises:
            OperationInProgressError: If speech synthesis is already running.
        """
        if not self.state.generated_content:
            return self.state
        if self.playback.is_playing:
            self.stop_audio()
            return self.state
        if self.state.is_generating_audio:
            raise OperationInProgressError("speech synthesis")

        self.state.is_generating_audio = True
        self.state.error_message = None
        self.stop_audio()
        try:
            clip = await self.synthesizer.asynthesize(self.state.generated_content)
            self.playback.start(clip)
        except Exception:
            logger.exception("Speech synthesis failed")
            self.state.error_message = SPEECH_ERROR_MESSAGE
        finally:
            self.state.is_generating_audio = False
            self._sync_playback()

        return self.state

    def stop_audio(self) -> StudioState:
        """Stop and discard the active audio clip."""
        self.playback.stop()
        self._sync_playback()
        return self.state

    def finish_audio(self, clip_id: str) -> StudioState:
        """Handle the client's notification that a clip finished playing."""
        self.playback.finish(clip_id)
        self._sync_playback()
        return self.state

    def get_audio_clip(self, clip_id: str) -> AudioClip | None:
        return self.playback.get_clip(clip_id)

    def _sync_playback(self) -> None:
        self.state.is_playing_audio = self.playback.is_playing
        clip = self.playback.current
        self.state.audio_clip_id = clip.id if clip is not None else None

    # ---- history ----

    def _record(self, category: CategoryId, topic: str, content: str) -> HistoryItem | None:
        """Prepend a history entry. A failed write is logged and leaves the content shown."""
        try:
            return self.history.add(category, topic, content)
        except Exception:
            logger.exception(f"Failed to save history entry to {self.history.path}")
            return None

    def load_history_item(self, item_id: str) -> StudioState:
        """Restore category, topic and content from a history entry.

        The style sample is not stored in history, so the style badge is cleared.

        Raises:
            HistoryItemNotFoundError: If no entry has that id.
        """
        item = self.history.get(item_id)
        self.state.selected_category = item.category
        self.state.topic = item.topic
        self.state.generated_content = item.content
        self.state.show_style_badge = False
        return self.state

    def delete_history_item(self, item_id: str) -> bool:
        return self.history.delete(item_id)

    @property
    def history_items(self) -> list[HistoryItem]:
        return self.history.items

    # ---- export ----

    def export_content(self) -> tuple[str, str] | None:
        """Return (filename, text) for a plain-text download, or None without content."""
        if not self.state.generated_content:
            return None
        return f"BanglaMuse-{int(time.time() * 1000)}.txt", self.state.generated_content
