import copy
from typing import Dict, List, Optional

from todo_service.app.services.collection_store import CollectionStore


class InMemoryCollectionStore(CollectionStore):
    """
    CollectionStore kept in process memory, for serverless deployments
    and tests. Records are deep-copied in both directions so callers never
    share mutable state with the store.
    """

    def __init__(self, seed: Optional[Dict[str, List[dict]]] = None):
        super().__init__()
        self._collections: Dict[str, List[dict]] = copy.deepcopy(seed) if seed else {}

    async def read(self, name: str) -> List[dict]:
        return copy.deepcopy(self._collections.get(name, []))

    async def write(self, name: str, records: List[dict]) -> None:
        self._collections[name] = copy.deepcopy(records)
