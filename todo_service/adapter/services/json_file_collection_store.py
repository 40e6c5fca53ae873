import asyncio
import json
import logging
import os
import tempfile
from typing import List

from todo_service.app.services.collection_store import CollectionStore, StorageError

logger = logging.getLogger(__name__)


class JsonFileCollectionStore(CollectionStore):
    """
    CollectionStore backed by one pretty-printed JSON file per collection.

    Files live at ``<data_dir>/<name>.json``. A missing file is an empty
    collection. Writes go to a temporary file that replaces the target, so a
    crash never leaves a truncated collection behind. Blocking file I/O runs
    in a worker thread.
    """

    def __init__(self, data_dir: str):
        super().__init__()
        self.data_dir = data_dir

    def _path(self, name: str) -> str:
        return os.path.join(self.data_dir, f"{name}.json")

    async def read(self, name: str) -> List[dict]:
        return await asyncio.to_thread(self._read_sync, name)

    async def write(self, name: str, records: List[dict]) -> None:
        await asyncio.to_thread(self._write_sync, name, records)

    def _read_sync(self, name: str) -> List[dict]:
        path = self._path(name)
        try:
            with open(path, "r", encoding="utf-8") as r_file:
                records = json.load(r_file)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            logger.error(f"Error reading collection {name} from {path}: {e}")
            return []

        if not isinstance(records, list):
            logger.error(f"Collection {name} in {path} is not a list, ignoring it")
            return []
        return records

    def _write_sync(self, name: str, records: List[dict]) -> None:
        path = self._path(name)
        try:
            os.makedirs(self.data_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{name}.", suffix=".tmp", dir=self.data_dir
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as w_file:
                    json.dump(records, w_file, indent=2)
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Error writing collection {name} to {path}: {e}")
            raise StorageError(f"Failed to save collection {name}") from e
