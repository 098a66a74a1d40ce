"""
Editable status configuration for one admin session.

The registry keeps two copies of both category lists: `committed` (what
was last loaded from / written to the store) and `draft` (what the admin is
editing). Edits only touch the draft. `persist()` validates the draft,
writes both categories in one transaction guarded by the row versions that
were loaded, and only then promotes the draft to committed. A failed save
leaves both the store and the draft as they were, so it can be retried.
"""
import asyncio
import logging
import uuid
from typing import Dict, List, Sequence

from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import STATUS_PERSIST_TIMEOUT_SECONDS
from app.core.exceptions import StatusConfigInvalidError, PersistenceFailureError
from app.models.enums.status_category import StatusCategory
from app.models.enums.status_action import ReorderDirection
from app.schemas.status.status_config_schemas import (
    StatusConfig,
    StatusConfigUpdate,
    StatusFieldError,
)
from app.services.status import status_store
from app.services.status.status_validation import validate_status_settings

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "new_"


class CategoryDiff(BaseModel):
    added: List[str] = Field(default_factory=list)
    removed: List[str] = Field(default_factory=list)
    changed: List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.changed)


class StatusDiff(BaseModel):
    quote: CategoryDiff = Field(default_factory=CategoryDiff)
    order: CategoryDiff = Field(default_factory=CategoryDiff)

    @property
    def is_empty(self) -> bool:
        return self.quote.is_empty and self.order.is_empty

    def summary(self) -> str:
        parts = []
        for category in StatusCategory:
            d: CategoryDiff = getattr(self, category.value)
            if d.is_empty:
                continue
            parts.append(
                f"{category.value} +{len(d.added)} ~{len(d.changed)} -{len(d.removed)}"
            )
        return "; ".join(parts) or "no changes"


def _sorted(statuses: Sequence[StatusConfig]) -> List[StatusConfig]:
    return sorted(statuses, key=lambda s: s.order)


def _error_field(loc: tuple) -> str:
    """Validation error location in the stored camelCase shape."""
    parts = [str(p) for p in loc]
    field = StatusConfig.model_fields.get(parts[0]) if parts else None
    if field is not None and field.alias:
        parts[0] = field.alias
    return ".".join(parts)


class StatusRegistry:
    def __init__(
        self,
        quote_statuses: Sequence[StatusConfig] = (),
        order_statuses: Sequence[StatusConfig] = (),
        versions: Dict[str, int] | None = None,
    ):
        self._committed: Dict[StatusCategory, List[StatusConfig]] = {
            StatusCategory.quote: _sorted(quote_statuses),
            StatusCategory.order: _sorted(order_statuses),
        }
        # StatusConfig is frozen, so sharing instances between the two
        # copies is safe; edits replace entries instead of mutating them.
        self._draft: Dict[StatusCategory, List[StatusConfig]] = {
            c: list(items) for c, items in self._committed.items()
        }
        self._versions: Dict[str, int] = dict(versions or {})

    @classmethod
    async def load(cls, db: AsyncSession) -> "StatusRegistry":
        quote_statuses, order_statuses, versions = await status_store.get_all_statuses(db)
        return cls(quote_statuses, order_statuses, versions)

    # -------------------------------
    # READ
    # -------------------------------
    @property
    def versions(self) -> Dict[str, int]:
        return dict(self._versions)

    def load_all(self, category: StatusCategory) -> List[StatusConfig]:
        return _sorted(self._draft[category])

    def committed(self, category: StatusCategory) -> List[StatusConfig]:
        return _sorted(self._committed[category])

    def all_statuses(self) -> List[StatusConfig]:
        """Draft statuses of both categories, quote first."""
        return self.load_all(StatusCategory.quote) + self.load_all(StatusCategory.order)

    def get(self, status_id: str) -> StatusConfig | None:
        for items in self._draft.values():
            for s in items:
                if s.id == status_id:
                    return s
        return None

    def _locate(self, status_id: str) -> tuple[StatusCategory, int] | None:
        for category, items in self._draft.items():
            for i, s in enumerate(items):
                if s.id == status_id:
                    return category, i
        return None

    # -------------------------------
    # EDIT (draft only)
    # -------------------------------
    def add(self, category: StatusCategory) -> StatusConfig:
        items = self._draft[category]
        next_order = max((s.order for s in items), default=0) + 1

        status = StatusConfig(
            id=f"{TEMP_ID_PREFIX}{uuid.uuid4().hex[:12]}",
            name="",
            label="",
            description="",
            category=category,
            color="default",
            icon="Clock",
            is_active=True,
            order=next_order,
            allowed_transitions=[],
            is_terminal=False,
        )
        items.append(status)
        logger.debug("Draft status added", extra={"status_id": status.id, "category": category.value})
        return status

    def update(self, status_id: str, partial: StatusConfigUpdate | dict) -> bool:
        located = self._locate(status_id)
        if located is None:
            logger.warning("Update ignored: status not found", extra={"status_id": status_id})
            return False

        category, index = located
        current = self._draft[category][index]

        # revalidate the merged entry; an explicit null on a required field is rejected here
        try:
            if isinstance(partial, dict):
                partial = StatusConfigUpdate.model_validate(partial)
            changes = {f: getattr(partial, f) for f in partial.model_fields_set}
            if not changes:
                return True
            merged = StatusConfig.model_validate({**current.model_dump(), **changes})
        except ValidationError as e:
            raise StatusConfigInvalidError(
                [
                    StatusFieldError(
                        category=category,
                        status_id=status_id,
                        field=_error_field(err["loc"]),
                        message=err["msg"],
                    ).model_dump(mode="json")
                    for err in e.errors()
                ]
            )

        self._draft[category][index] = merged
        return True

    def remove(self, status_id: str) -> bool:
        located = self._locate(status_id)
        if located is None:
            logger.warning("Remove ignored: status not found", extra={"status_id": status_id})
            return False

        category, index = located
        # no check against quotes currently sitting in this status
        del self._draft[category][index]
        self._renumber(category)
        return True

    def reorder(self, status_id: str, direction: ReorderDirection | str) -> bool:
        direction = ReorderDirection(direction)

        located = self._locate(status_id)
        if located is None:
            logger.warning("Reorder ignored: status not found", extra={"status_id": status_id})
            return False

        category, _ = located
        items = _sorted(self._draft[category])
        index = next(i for i, s in enumerate(items) if s.id == status_id)
        neighbour = index - 1 if direction == ReorderDirection.up else index + 1

        if neighbour < 0 or neighbour >= len(items):
            return False

        items[index], items[neighbour] = items[neighbour], items[index]
        self._draft[category] = [
            s if s.order == i else s.model_copy(update={"order": i})
            for i, s in enumerate(items, start=1)
        ]
        return True

    def replace_draft(
        self,
        quote_statuses: Sequence[StatusConfig],
        order_statuses: Sequence[StatusConfig],
    ) -> None:
        """Swap in whole lists edited elsewhere (e.g. sent by the admin UI)."""
        self._draft = {
            StatusCategory.quote: list(quote_statuses),
            StatusCategory.order: list(order_statuses),
        }

    def discard(self) -> None:
        self._draft = {c: list(items) for c, items in self._committed.items()}

    def _renumber(self, category: StatusCategory) -> None:
        self._draft[category] = [
            s if s.order == i else s.model_copy(update={"order": i})
            for i, s in enumerate(_sorted(self._draft[category]), start=1)
        ]

    # -------------------------------
    # DIFF / VALIDATE
    # -------------------------------
    def diff(self) -> StatusDiff:
        result = StatusDiff()
        for category in StatusCategory:
            before = {s.id: s for s in self._committed[category]}
            after = {s.id: s for s in self._draft[category]}
            d: CategoryDiff = getattr(result, category.value)
            d.added = [i for i in after if i not in before]
            d.removed = [i for i in before if i not in after]
            d.changed = [i for i in after if i in before and after[i] != before[i]]
        return result

    @property
    def is_dirty(self) -> bool:
        return not self.diff().is_empty

    def validate(self) -> List[StatusFieldError]:
        return validate_status_settings(
            self._draft[StatusCategory.quote],
            self._draft[StatusCategory.order],
        )

    # -------------------------------
    # PERSIST
    # -------------------------------
    def _finalized(self, category: StatusCategory) -> List[StatusConfig]:
        """Draft list with temporary ids replaced by permanent ones."""
        items = _sorted(self._draft[category])
        used = {s.id for s in items if not s.id.startswith(TEMP_ID_PREFIX)}
        finalized = []
        for s in items:
            if s.id.startswith(TEMP_ID_PREFIX):
                new_id = s.name if s.name not in used else f"{s.name}_{uuid.uuid4().hex[:6]}"
                used.add(new_id)
                s = s.model_copy(update={"id": new_id})
            finalized.append(s)
        return finalized

    async def persist(self, db: AsyncSession, *, actor: str | None = None) -> StatusDiff:
        errors = self.validate()
        if errors:
            raise StatusConfigInvalidError([e.model_dump(mode="json") for e in errors])

        diff = self.diff()
        quote_statuses = self._finalized(StatusCategory.quote)
        order_statuses = self._finalized(StatusCategory.order)

        try:
            versions = await asyncio.wait_for(
                status_store.put_all(
                    db,
                    quote_statuses,
                    order_statuses,
                    expected_versions=self._versions,
                    actor=actor,
                    changes=diff.summary(),
                ),
                timeout=STATUS_PERSIST_TIMEOUT_SECONDS,
            )
        except asyncio.TimeoutError:
            await db.rollback()
            logger.error(
                "Status settings save timed out after %ss",
                STATUS_PERSIST_TIMEOUT_SECONDS,
            )
            raise PersistenceFailureError(
                "Saving status settings timed out. Your changes were kept; please retry.",
                details={"timeout_seconds": STATUS_PERSIST_TIMEOUT_SECONDS},
            )

        self._committed = {
            StatusCategory.quote: quote_statuses,
            StatusCategory.order: order_statuses,
        }
        self._draft = {c: list(items) for c, items in self._committed.items()}
        self._versions = versions
        return diff
