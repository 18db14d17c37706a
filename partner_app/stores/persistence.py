"""
Partial persistence of controller state.

Only an allow-listed subset of a store's state is written to device storage.
`partialize_state` and `restore_state` are pure; `StatePersister` only moves the
resulting JSON in and out of the key-value storage.
"""
import logging
from typing import AbstractSet, Any, Dict, Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError
from partner_app.utils.storage import KeyValueStorage

logger = logging.getLogger(__name__)

STORAGE_VERSION = 0

StateT = TypeVar("StateT", bound=BaseModel)


def partialize_state(state: BaseModel, fields: AbstractSet[str]) -> Dict[str, Any]:
    """Maps full state to the JSON-safe persisted subset."""
    return state.model_dump(mode="json", include=set(fields))


def restore_state(
        model: Type[StateT],
        payload: Optional[Dict[str, Any]],
        fields: AbstractSet[str]
) -> StateT:
    """
    Rebuilds a state object from a persisted subset.
    Fields outside `fields` always start from their defaults; an unreadable
    payload yields a fresh state.
    """
    if not payload:
        return model()
    kept = {k: v for k, v in payload.items() if k in fields}
    try:
        return model.model_validate(kept)
    except ValidationError as e:
        logger.warning(f"Discarding persisted {model.__name__}: {e}")
        return model()


class StatePersister:
    def __init__(self, storage: KeyValueStorage, key: str, fields: AbstractSet[str]):
        self.storage = storage
        self.key = key
        self.fields = fields

    async def load(self, model: Type[StateT]) -> StateT:
        envelope = await self.storage.get_json(self.key)
        payload = None
        if isinstance(envelope, dict):
            if envelope.get("version", STORAGE_VERSION) != STORAGE_VERSION:
                logger.warning(f"Ignoring '{self.key}' stored with version {envelope.get('version')}.")
            else:
                payload = envelope.get("state")
        state = restore_state(model, payload, self.fields)
        logger.info(f"Restored '{self.key}' from storage." if payload else f"No stored '{self.key}', starting fresh.")
        return state

    async def save(self, state: BaseModel) -> bool:
        return await self.storage.set_json(
            self.key,
            {"state": partialize_state(state, self.fields), "version": STORAGE_VERSION},
        )

    async def clear(self) -> None:
        await self.storage.remove_item(self.key)
