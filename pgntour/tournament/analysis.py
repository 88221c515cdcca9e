"""
Client for the external chess-engine analysis service.

One POST per game. Calls are made one at a time by the importer; retrying is
left to whoever re-runs the games listed as needing analysis.
"""

from typing import Optional
import logging

import requests
from django.conf import settings

from pgntour.tournament_core.importer import AnalysisError

logger = logging.getLogger(__name__)


class EngineAnalysisClient:
    """GameAnalyzer that posts PGN to the engine analysis HTTP API."""

    def __init__(
        self,
        url: Optional[str] = None,
        depth: Optional[int] = None,
        find_alternatives: bool = True,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.url = url or settings.ENGINE_ANALYSIS_URL
        self.depth = depth or settings.ENGINE_ANALYSIS_DEPTH
        self.find_alternatives = find_alternatives
        self.timeout = timeout or settings.ENGINE_ANALYSIS_TIMEOUT
        self.session = session or requests.Session()

    def analyze(self, pgn: str) -> str:
        """Analyse one game and return the service's analysis id."""
        payload = {
            "pgn": pgn,
            "depth": self.depth,
            "find_alternatives": self.find_alternatives,
        }
        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise AnalysisError(f"Engine analysis request failed: {e}") from e
        except ValueError as e:
            raise AnalysisError(f"Engine analysis returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise AnalysisError("Engine analysis response is not a JSON object")
        analysis_id = data.get("id") or data.get("analysis_id")
        if not analysis_id:
            raise AnalysisError("Engine analysis response has no analysis id")
        logger.debug("Engine analysis %s stored", analysis_id)
        return str(analysis_id)
