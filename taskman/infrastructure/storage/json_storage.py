"""JSON file storage with Result-based error handling.

Provides a thin wrapper around file I/O operations for JSON data,
returning Result types instead of raising exceptions.
"""

import json
import logging
from pathlib import Path
from typing import Any

from taskman.domain.shared.errors import PersistenceError
from taskman.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class JsonStorage:
    """Low-level JSON file I/O with Result-based error handling.

    This class wraps basic JSON operations (load/save) and returns
    Result types for explicit error handling. It does not contain
    any domain logic - just file I/O.

    Example:
        storage = JsonStorage()
        result = storage.load_json(Path("data/tasks.json"))
        if isinstance(result, Ok):
            data = result.value
        else:
            print(f"Error: {result.error}")
    """

    def load_json(self, path: Path) -> Result[dict[str, Any], PersistenceError]:
        """Load JSON data from a file.

        Args:
            path: Path to the JSON file to read.

        Returns:
            Ok(dict) if successful, Err(PersistenceError) if failed.
        """
        try:
            if not path.exists():
                return Err(PersistenceError(f"File not found: {path}", path))

            content = path.read_text(encoding="utf-8")
            data = json.loads(content)
            if not isinstance(data, dict):
                return Err(PersistenceError(f"Expected a JSON object in {path}", path))
            logger.debug(f"Loaded {path}")
            return Ok(data)

        except json.JSONDecodeError as e:
            return Err(PersistenceError(f"Invalid JSON in {path}: {e}", path))
        except PermissionError:
            return Err(PersistenceError(f"Permission denied reading {path}", path))
        except OSError as e:
            return Err(PersistenceError(f"Error reading {path}: {e}", path))

    def save_json(
        self,
        path: Path,
        data: dict[str, Any],
        indent: int = 2,
    ) -> Result[None, PersistenceError]:
        """Save JSON data to a file, replacing its contents.

        The document is serialized before the file is opened, so a
        serialization failure leaves the existing file untouched.

        Args:
            path: Path to the JSON file to write.
            data: Dictionary to serialize as JSON.
            indent: JSON indentation level (default 2).

        Returns:
            Ok(None) if successful, Err(PersistenceError) if failed.
        """
        try:
            content = json.dumps(data, indent=indent)

            # Ensure parent directory exists
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            logger.debug(f"Saved {path}")
            return Ok(None)

        except TypeError as e:
            return Err(PersistenceError(f"Data not JSON serializable: {e}", path))
        except PermissionError:
            return Err(PersistenceError(f"Permission denied writing {path}", path))
        except OSError as e:
            return Err(PersistenceError(f"Error writing {path}: {e}", path))
