"""Streamlit web application for the BanglaMuse writing studio."""

import time

import httpx
import streamlit as st

from banglamuse.categories import LENGTH_LABELS, LengthOption
from banglamuse.chains.refiner import ACTION_LABELS
from banglamuse.state import StudioState
from banglamuse.ui.api_client import APIClient
from banglamuse.ui.utils import (
    format_category_bn,
    format_timestamp,
    truncate_text,
    wav_duration,
    word_count,
)

# Page configuration
st.set_page_config(
    page_title="BanglaMuse Pro",
    page_icon="✒️",
    layout="wide",
)

# Initialize API client
api_client = APIClient()


def init_session_state():
    """Initialize session state variables."""
    if "studio" not in st.session_state:
        try:
            st.session_state.studio = StudioState.model_validate(api_client.get_state())
        except httpx.HTTPError:
            st.session_state.studio = StudioState()
    if "audio_bytes" not in st.session_state:
        st.session_state.audio_bytes = None
        st.session_state.audio_started_at = None
        st.session_state.audio_duration = 0.0


def _apply(state: dict) -> StudioState:
    studio = StudioState.model_validate(state)
    st.session_state.studio = studio
    return studio


def _set_audio(audio: bytes | None):
    st.session_state.audio_bytes = audio
    st.session_state.audio_started_at = time.monotonic() if audio else None
    st.session_state.audio_duration = wav_duration(audio) if audio else 0.0


def sync_playback():
    """Tell the API a clip has finished once its playing time has passed."""
    studio: StudioState = st.session_state.studio
    started_at = st.session_state.audio_started_at
    if not studio.is_playing_audio or not studio.audio_clip_id or started_at is None:
        return
    if time.monotonic() - started_at < st.session_state.audio_duration:
        return
    try:
        _apply(api_client.speech_ended(studio.audio_clip_id))
    except httpx.HTTPError:
        return
    _set_audio(None)


def render_sidebar():
    """Render sidebar with history and API status."""
    with st.sidebar:
        st.title("📜 পূর্বের লেখা")

        try:
            history = api_client.list_history()
        except httpx.HTTPError:
            history = []

        if not history:
            st.caption("কোনো ইতিহাস পাওয়া যায়নি।")

        for item in history:
            with st.container(border=True):
                st.markdown(f"**{format_category_bn(item['category'])}**")
                st.write(truncate_text(item["topic"], max_length=80))
                st.caption(
                    f"{format_timestamp(item['timestamp'])} • {word_count(item['content'])} words"
                )
                col1, col2 = st.columns(2)
                with col1:
                    if st.button("খুলুন", key=f"load-{item['id']}"):
                        _apply(api_client.load_history(item["id"]))
                        st.rerun()
                with col2:
                    if st.button("মুছুন", key=f"delete-{item['id']}"):
                        api_client.delete_history(item["id"])
                        st.rerun()

        st.divider()
        if api_client.health_check():
            st.success("✅ API connected")
        else:
            st.error("❌ API connection error")
            st.caption("Start the API server first")


def render_input_section():
    """Render the compose form."""
    studio: StudioState = st.session_state.studio

    st.header("✍️ লেখার ধরন")
    categories = api_client.get_categories()
    category_ids = [c["id"] for c in categories]
    category = st.radio(
        "Category",
        options=category_ids,
        index=category_ids.index(studio.selected_category.value),
        format_func=lambda cid: next(
            f"{c['bn_label']} · {c['description']}" for c in categories if c["id"] == cid
        ),
        label_visibility="collapsed",
    )

    topic = st.text_area(
        "আপনার আইডিয়া বা বিষয়",
        value=studio.topic,
        height=120,
        placeholder="যেমন: শরতের কাশফুল, শৈশবের স্মৃতি...",
    )

    with st.expander("উন্নত সেটিংস"):
        length_options = list(LengthOption)
        length = st.selectbox(
            "দৈর্ঘ্য",
            options=length_options,
            index=length_options.index(studio.length),
            format_func=lambda option: LENGTH_LABELS[option],
        )
        creativity = st.slider("সৃজনশীলতা", 0.0, 1.0, value=studio.creativity, step=0.1)

    with st.expander("নিজস্ব স্টাইল (Custom Style)", expanded=bool(studio.style_sample)):
        style_sample = st.text_area(
            "নমুনা টেক্সট",
            value=studio.style_sample,
            height=150,
            placeholder="নমুনা টেক্সট এখানে দিন...",
        )

    if studio.error_message:
        st.error(studio.error_message)

    if st.button("✨ লেখা তৈরি করুন", type="primary", disabled=studio.is_generating):
        with st.spinner("লেখা তৈরি হচ্ছে..."):
            _set_audio(None)
            _apply(
                api_client.generate(
                    topic=topic,
                    category=category,
                    style_sample=style_sample,
                    length=length.value,
                    creativity=creativity,
                )
            )
        st.rerun()


def render_output_section():
    """Render generated content with its toolbar."""
    studio: StudioState = st.session_state.studio
    content = studio.generated_content

    st.header("📄 ফলাফল")

    info = f"{word_count(content)} শব্দ"
    if studio.show_style_badge and content:
        info += " • ✨ Custom Style"
    st.caption(info)

    if not content:
        st.info("আপনার লেখা এখানে দেখা যাবে।")
        return

    # st.code provides a copy-to-clipboard button
    st.code(content, language=None, wrap_lines=True)

    col1, col2 = st.columns(2)
    with col1:
        label = "⏹ থামান" if studio.is_playing_audio else "▶ শুনুন"
        if st.button(label, disabled=studio.is_generating_audio, key="speech-toggle"):
            if studio.is_playing_audio:
                _apply(api_client.stop_speech())
                _set_audio(None)
            else:
                with st.spinner("অডিও তৈরি হচ্ছে..."):
                    studio = _apply(api_client.toggle_speech())
                    if studio.is_playing_audio and studio.audio_clip_id:
                        _set_audio(api_client.get_audio(studio.audio_clip_id))
                    else:
                        _set_audio(None)
            st.rerun()
    with col2:
        st.download_button(
            label="📥 ডাউনলোড",
            data=content,
            file_name=f"BanglaMuse-{int(time.time() * 1000)}.txt",
            mime="text/plain",
        )

    if st.session_state.audio_bytes:
        st.audio(st.session_state.audio_bytes, format="audio/wav", autoplay=True)

    st.subheader("পরিমার্জন")
    columns = st.columns(len(ACTION_LABELS))
    for column, (action, action_label) in zip(columns, ACTION_LABELS.items()):
        with column:
            if st.button(action_label, disabled=studio.is_refining, key=f"refine-{action.value}"):
                with st.spinner("পরিবর্তন হচ্ছে..."):
                    _apply(
                        api_client.refine(
                            action.value,
                            category=studio.selected_category.value,
                            topic=studio.topic,
                        )
                    )
                st.rerun()


def main():
    """Main application entry point."""
    init_session_state()
    sync_playback()

    st.title("✒️ BanglaMuse Pro")
    st.caption("আপনার স্টাইলে, আপনার ভাষায়")

    render_sidebar()

    col1, col2 = st.columns([5, 7])

    with col1:
        render_input_section()

    with col2:
        render_output_section()


if __name__ == "__main__":
    main()
