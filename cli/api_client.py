"""REST API client for wordplay server."""

import requests


class WordplayAPIClient:
    """Client for communicating with the wordplay REST API."""

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

    def _post(self, endpoint: str, data: dict = None) -> dict:
        """Make a POST request."""
        if data is None:
            data = {}
        data['user_id'] = self.user_id
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def list_sets(self) -> list[dict]:
        """Get vocabulary set summaries."""
        return self._get("/api/sets")['sets']

    # Matching

    def get_matching(self) -> dict:
        return self._get("/api/matching")

    def start_matching(self, set_id: str) -> dict:
        return self._post("/api/matching/start", {'set_id': set_id})

    def select_card(self, card_id: str) -> dict:
        return self._post("/api/matching/select", {'card_id': card_id})

    def reset_matching(self) -> dict:
        return self._post("/api/matching/reset")

    # Puzzle

    def get_puzzle(self) -> dict:
        return self._get("/api/puzzle")

    def start_puzzle(self, set_id: str) -> dict:
        return self._post("/api/puzzle/start", {'set_id': set_id})

    def submit_answer(self, answer: str) -> dict:
        return self._post("/api/puzzle/answer", {'answer': answer})

    def skip_challenge(self) -> dict:
        return self._post("/api/puzzle/skip")

    def place_piece(self, piece_index: int, row: int, col: int) -> dict:
        return self._post("/api/puzzle/place", {
            'piece_index': piece_index,
            'row': row,
            'col': col
        })

    def reset_puzzle(self) -> dict:
        return self._post("/api/puzzle/reset")
