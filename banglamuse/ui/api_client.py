"""API client for communicating with the FastAPI backend."""

import logging
import os
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class APIClient:
    """Client for the writing studio API."""

    def __init__(self, base_url: str | None = None):
        """Initialize the API client.

        Args:
            base_url: Base URL of the API server. If not provided, uses API_URL env var
                     or defaults to http://localhost:8000.
        """
        self.base_url = base_url or os.environ.get("API_URL", "http://localhost:8000")
        self.timeout = 120.0  # 2 minutes for LLM operations

    def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        with httpx.Client(timeout=timeout or self.timeout) as client:
            response = client.request(method, f"{self.base_url}{path}", json=json)
            response.raise_for_status()
            return response

    def health_check(self) -> bool:
        """Check if the API is healthy.

        Returns:
            True if API is healthy, False otherwise.
        """
        try:
            with httpx.Client(timeout=5.0) as client:
                response = client.get(f"{self.base_url}/health")
                return response.status_code == 200
        except httpx.RequestError:
            return False

    def get_categories(self) -> list[dict[str, Any]]:
        """Get category metadata."""
        return self._request("GET", "/categories", timeout=10.0).json()

    def get_state(self) -> dict[str, Any]:
        """Get the current studio state."""
        return self._request("GET", "/state", timeout=10.0).json()

    def generate(
        self,
        topic: str,
        category: str = "article",
        style_sample: str = "",
        length: str = "medium",
        creativity: float | None = None,
    ) -> dict[str, Any]:
        """Generate content.

        Args:
            topic: Topic or idea.
            category: Category id.
            style_sample: Optional writing sample to imitate.
            length: Length option id.
            creativity: Sampling temperature.

        Returns:
            Studio state after generation.

        Raises:
            httpx.HTTPStatusError: If the request fails.
        """
        return self._request(
            "POST",
            "/generate",
            json={
                "topic": topic,
                "category": category,
                "style_sample": style_sample,
                "length": length,
                "creativity": creativity,
            },
        ).json()

    def refine(
        self,
        action: str,
        category: str | None = None,
        topic: str | None = None,
    ) -> dict[str, Any]:
        """Refine the current content.

        Raises:
            httpx.HTTPStatusError: If the request fails.
        """
        return self._request(
            "POST",
            "/refine",
            json={"action": action, "category": category, "topic": topic},
        ).json()

    def toggle_speech(self) -> dict[str, Any]:
        """Start reading aloud, or stop if already playing."""
        return self._request("POST", "/speech").json()

    def stop_speech(self) -> dict[str, Any]:
        return self._request("POST", "/speech/stop", timeout=10.0).json()

    def speech_ended(self, clip_id: str) -> dict[str, Any]:
        return self._request("POST", "/speech/ended", json={"clip_id": clip_id}, timeout=10.0).json()

    def get_audio(self, clip_id: str) -> bytes:
        """Download the WAV bytes of an audio clip."""
        return self._request("GET", f"/speech/{clip_id}", timeout=30.0).content

    def list_history(self) -> list[dict[str, Any]]:
        """List history entries, most recent first."""
        return self._request("GET", "/history", timeout=10.0).json()

    def delete_history(self, item_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/history/{item_id}", timeout=10.0).json()

    def load_history(self, item_id: str) -> dict[str, Any]:
        """Load a history entry into the editor."""
        return self._request("POST", f"/history/{item_id}/load", timeout=10.0).json()
