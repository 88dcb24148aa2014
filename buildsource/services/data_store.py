"""JSON data store for BuildSource.

Read-only access to the flat-file records the web layer maintains
(materials.json, projects.json).
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog

from config.errors import DataStoreError
from config.settings import settings

logger = structlog.get_logger(__name__)


class JsonDataStore:
    """Loads JSON arrays from a data directory.

    Files are re-read on every call so edits made by the web layer are
    picked up without a restart. A missing or unparseable file yields an
    empty list.
    """

    MATERIALS_FILE = "materials.json"
    PROJECTS_FILE = "projects.json"

    def __init__(self, data_dir: Optional[Union[str, Path]] = None):
        """Initialize JsonDataStore.

        Args:
            data_dir: Directory holding the JSON files. Defaults to settings.data_dir.
        """
        self.data_dir = Path(data_dir or settings.data_dir)

    def _load_list(self, filename: str) -> List[Dict[str, Any]]:
        """Load a JSON file whose top level is a list.

        Raises:
            DataStoreError: If the file parses but is not a list.
        """
        path = self.data_dir / filename
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("data_file_load_failed", filename=filename, path=str(path), error=str(e))
            return []

        if data is None:
            return []
        if not isinstance(data, list):
            raise DataStoreError(
                message=f"Expected a JSON array in {filename}, got {type(data).__name__}",
                filename=filename
            )

        logger.debug("data_file_loaded", filename=filename, records=len(data))
        return data

    def get_materials(self) -> List[Dict[str, Any]]:
        """Raw material records."""
        return self._load_list(self.MATERIALS_FILE)

    def get_historical_projects(self) -> List[Dict[str, Any]]:
        """Raw historical project records."""
        return self._load_list(self.PROJECTS_FILE)
