"""Material catalog accessor for BuildSource.

Read-only view over the loaded material records. Supplies unit prices
to the breakdown engine.
"""

from typing import Any, Dict, Iterable, List, Optional, Union

import structlog
from pydantic import ValidationError as PydanticValidationError

from models.material import MaterialRecord

logger = structlog.get_logger(__name__)

MaterialInput = Union[MaterialRecord, Dict[str, Any]]


class MaterialCatalog:
    """Immutable id -> MaterialRecord index.

    Malformed raw records are skipped with a warning. When two records
    share an id the first one wins.
    """

    def __init__(self, materials: Iterable[MaterialInput] = ()):
        self._by_id: Dict[int, MaterialRecord] = {}

        for raw in materials:
            try:
                record = raw if isinstance(raw, MaterialRecord) else MaterialRecord.model_validate(raw)
            except PydanticValidationError as e:
                logger.warning(
                    "material_record_skipped",
                    material_id=raw.get("id") if isinstance(raw, dict) else None,
                    errors=[f"{err['loc']}: {err['msg']}" for err in e.errors()]
                )
                continue

            if record.id in self._by_id:
                logger.warning("material_duplicate_id", material_id=record.id)
                continue
            self._by_id[record.id] = record

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, material_id: object) -> bool:
        return material_id in self._by_id

    def lookup(self, material_id: int) -> Optional[MaterialRecord]:
        """Return the material with this id, or None."""
        return self._by_id.get(material_id)

    def resolve(self, material_ids: Iterable[int]) -> List[MaterialRecord]:
        """Resolve ids in order, skipping any the catalog does not hold."""
        resolved = []
        for material_id in material_ids:
            record = self.lookup(material_id)
            if record is None:
                logger.warning("material_lookup_miss", material_id=material_id)
                continue
            resolved.append(record)
        return resolved

    def all(self) -> List[MaterialRecord]:
        """All records in load order."""
        return list(self._by_id.values())
