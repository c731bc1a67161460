# SPDX-License-Identifier: MIT

import uuid
from typing import Iterable, Optional, TypeAlias

EntityId: TypeAlias = str

SHORT_ID_LENGTH = 8


def generate_entity_id() -> EntityId:
    return str(uuid.uuid4())


def short_entity_id(entity_id: EntityId) -> str:
    return entity_id[:SHORT_ID_LENGTH]


def resolve_entity_id(prefix: str, entity_ids: Iterable[EntityId]) -> Optional[EntityId]:
    """Return the single id starting with prefix, or None if absent or ambiguous."""
    matches = [entity_id for entity_id in entity_ids if entity_id.startswith(prefix)]
    if len(matches) != 1:
        return None
    return matches[0]
