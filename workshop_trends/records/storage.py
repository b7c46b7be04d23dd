"""
JSON file persistence for advisors and forecast inputs.
"""

import json
import logging
import os
from typing import Dict, Tuple

logger = logging.getLogger(__name__)


class JsonFileStorage:
    """
    Stores ``{"advisors": {...}, "forecasts": {...}}`` in a single JSON file.

    Both mappings are keyed by the advisor key ``code|location``.
    """

    def __init__(self, path: str):
        self.path = path

    def load(self) -> Tuple[Dict, Dict]:
        """Load (advisors, forecasts); a missing file is an empty store."""
        if not os.path.exists(self.path):
            logger.info(f"No store at {self.path}, starting empty")
            return {}, {}
        with open(self.path, encoding='utf-8') as f:
            data = json.load(f)
        advisors = data.get('advisors') or {}
        forecasts = data.get('forecasts') or {}
        logger.info(f"Loaded {len(advisors)} advisor record(s) from {self.path}")
        return advisors, forecasts

    def save(self, advisors: Dict, forecasts: Dict) -> None:
        """Write the whole store, replacing the file atomically."""
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump({'advisors': advisors, 'forecasts': forecasts}, f, indent=2)
        os.replace(tmp_path, self.path)
        logger.debug(f"Saved {len(advisors)} advisor record(s) to {self.path}")
