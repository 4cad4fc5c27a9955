"""
In-memory entity storage.

Each entity kind lives in its own ``EntityStore``: an insertion-ordered map
from internal id to an immutable pydantic record, plus an index from the
business key to the internal id. Internal ids start at 1 and are never
reused within the lifetime of a store.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Type, TypeVar
import logging
import secrets
import threading
import time

from pydantic import BaseModel, ValidationError as PydanticValidationError

from .exceptions import DuplicateKeyError, RepositoryError, ValidationError

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))

def generate_business_key(prefix: str) -> str:
    """Build a key such as ``PTLQ3K9Z1A4F7XQ2``: prefix, base-36 millisecond
    timestamp and six random base-36 characters, upper-cased."""
    timestamp = to_base36(int(time.time() * 1000))
    suffix = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"{prefix}{timestamp}{suffix}".upper()

def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EntityStore(Generic[EntityT]):
    """Storage for a single entity kind."""

    def __init__(
        self,
        model: Type[EntityT],
        *,
        label: str,
        key_field: Optional[str] = None,
        key_prefix: Optional[str] = None,
        timestamp_field: Optional[str] = "created_at",
        touch_on_update: bool = False,
        max_key_attempts: int = 5,
        key_generator: Callable[[str], str] = generate_business_key,
    ):
        self.model = model
        self.label = label
        self.key_field = key_field
        self.key_prefix = key_prefix
        self.timestamp_field = timestamp_field
        self.touch_on_update = touch_on_update
        self.max_key_attempts = max_key_attempts
        self.key_generator = key_generator

        self._entities: Dict[int, EntityT] = {}
        self._keys: Dict[str, int] = {}
        self._next_id = 1
        self._lock = threading.RLock()

        self._immutable = {"id"}
        if key_field:
            self._immutable.add(key_field)
        if timestamp_field:
            self._immutable.add(timestamp_field)

    def __len__(self) -> int:
        return len(self._entities)

    # Queries
    def list_all(self) -> List[EntityT]:
        with self._lock:
            return list(self._entities.values())

    def get(self, entity_id: int) -> Optional[EntityT]:
        with self._lock:
            return self._entities.get(entity_id)

    def get_by_key(self, key: str) -> Optional[EntityT]:
        with self._lock:
            entity_id = self._keys.get(key)
            if entity_id is None:
                return None
            return self._entities[entity_id]

    def find_first(self, predicate: Callable[[EntityT], bool]) -> Optional[EntityT]:
        with self._lock:
            return next((entity for entity in self._entities.values() if predicate(entity)), None)

    def filter(self, predicate: Callable[[EntityT], bool]) -> List[EntityT]:
        with self._lock:
            return [entity for entity in self._entities.values() if predicate(entity)]

    # Mutations
    def create(self, values: Mapping[str, Any]) -> EntityT:
        """Assign id, business key and timestamp, then store the record.

        A supplied business key must not already exist. The id counter only
        advances once the record passed validation.
        """
        values = dict(values)
        with self._lock:
            if self.key_field:
                key = values.get(self.key_field)
                if key:
                    if key in self._keys:
                        raise DuplicateKeyError(self.key_field, key)
                elif self.key_prefix:
                    values[self.key_field] = self._new_key()

            values["id"] = self._next_id
            if self.timestamp_field:
                values[self.timestamp_field] = utcnow()

            entity = self._validate(values)
            self._next_id += 1
            self._entities[entity.id] = entity
            if self.key_field:
                self._keys[getattr(entity, self.key_field)] = entity.id

        logger.debug(f"Created {self.label} id={entity.id} key={self._key_of(entity)}")
        return entity

    def update(self, key: str, changes: Mapping[str, Any]) -> Optional[EntityT]:
        with self._lock:
            entity_id = self._keys.get(key)
            if entity_id is None:
                return None
            return self._merge(entity_id, changes)

    def update_by_id(self, entity_id: int, changes: Mapping[str, Any]) -> Optional[EntityT]:
        with self._lock:
            if entity_id not in self._entities:
                return None
            return self._merge(entity_id, changes)

    def delete(self, key: str) -> bool:
        with self._lock:
            entity_id = self._keys.pop(key, None)
            if entity_id is None:
                return False
            del self._entities[entity_id]
        logger.debug(f"Deleted {self.label} id={entity_id} key={key}")
        return True

    def delete_by_id(self, entity_id: int) -> bool:
        with self._lock:
            entity = self._entities.pop(entity_id, None)
            if entity is None:
                return False
            if self.key_field:
                self._keys.pop(getattr(entity, self.key_field), None)
        logger.debug(f"Deleted {self.label} id={entity_id}")
        return True

    def _merge(self, entity_id: int, changes: Mapping[str, Any]) -> EntityT:
        # Shallow merge: only the supplied fields replace stored values.
        applied = {field: value for field, value in changes.items() if field not in self._immutable}
        merged = self._entities[entity_id].model_dump()
        merged.update(applied)
        if self.touch_on_update and self.timestamp_field:
            merged[self.timestamp_field] = utcnow()

        updated = self._validate(merged)
        self._entities[entity_id] = updated
        logger.debug(f"Updated {self.label} id={entity_id} fields={sorted(applied)}")
        return updated

    def _new_key(self) -> str:
        for _ in range(self.max_key_attempts):
            key = self.key_generator(self.key_prefix)
            if key not in self._keys:
                return key
            logger.warning(f"Generated {self.key_field} {key} collided, retrying")
        raise RepositoryError(
            f"Could not generate a unique {self.key_field} after {self.max_key_attempts} attempts"
        )

    def _validate(self, values: Dict[str, Any]) -> EntityT:
        try:
            return self.model.model_validate(values)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(f"Invalid {self.label} data", exc) from exc

    def _key_of(self, entity: EntityT) -> Any:
        return getattr(entity, self.key_field) if self.key_field else None
