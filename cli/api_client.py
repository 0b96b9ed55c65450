"""REST API client for the vocab arcade server."""

import requests
from typing import Optional


class ArcadeAPIClient:
    """Client for communicating with the vocab arcade REST API."""

    def __init__(self, base_url: str = "http://localhost:8000", user_id: str = "default"):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        if params is None:
            params = {}
        params['user_id'] = self.user_id
        response = self.session.get(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict) -> dict:
        """Make a POST request."""
        data['user_id'] = self.user_id
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def get_vocabulary(self) -> dict:
        """Get topics, parts of speech and game types."""
        return self._get("/api/vocabulary")

    def start_round(self, game_type: str = "balloon", selection_mode: str = "random",
                    topic_or_pos: Optional[str] = None, frequency_min: int = 1,
                    frequency_max: int = 6000, display_form: str = "vocalized",
                    duration: int = 60, question_count: Optional[int] = None) -> dict:
        """Start a new round."""
        return self._post("/api/rounds", {
            'game_type': game_type,
            'selection_mode': selection_mode,
            'topic_or_pos': topic_or_pos,
            'frequency_min': frequency_min,
            'frequency_max': frequency_max,
            'display_form': display_form,
            'duration': duration,
            'question_count': question_count
        })

    def get_round(self) -> dict:
        """Get the current round state."""
        return self._get("/api/rounds/current")

    def select(self, entity_id: str, question_id: Optional[int] = None) -> dict:
        """Select an answer entity."""
        return self._post("/api/rounds/select", {
            'entity_id': entity_id,
            'question_id': question_id
        })

    def answer(self, text: str, question_id: Optional[int] = None) -> dict:
        """Type an answer."""
        return self._post("/api/rounds/answer", {
            'text': text,
            'question_id': question_id
        })

    def restart_round(self) -> dict:
        return self._post("/api/rounds/restart", {})

    def stop_round(self) -> dict:
        return self._post("/api/rounds/stop", {})

    def get_session(self) -> dict:
        """Get cumulative score and missed words."""
        return self._get("/api/session")
