"""
Tests for app/services/status/status_registry.py

Tests cover:
- Draft edits (add / update / remove / reorder) never touching committed state
- Diff and discard
- Persist: round trip, validation failure, version conflict, write failure, timeout
"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from factories import make_status
from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.models.enums.status_category import StatusCategory
from app.models.enums.status_action import ReorderDirection
from app.schemas.status.status_config_schemas import StatusConfigUpdate
from app.services.status import status_registry, status_store
from app.services.status.status_registry import StatusRegistry, TEMP_ID_PREFIX
from app.services.status.transition_validator import is_transition_allowed


@pytest.fixture
def registry():
    return StatusRegistry(
        quote_statuses=[
            make_status("pending", "quote", 1, allowed_transitions=["sent"]),
            make_status("sent", "quote", 2, allowed_transitions=["approved"]),
            make_status("approved", "quote", 3),
        ],
        order_statuses=[
            make_status("paid", "order", 1, allowed_transitions=["shipped"]),
            make_status("shipped", "order", 2),
        ],
    )


def names(registry, category):
    return [s.name for s in registry.load_all(category)]


class TestDraftEdits:
    """Edits only touch the draft."""

    def test_load_all_sorted_by_order(self):
        registry = StatusRegistry(
            quote_statuses=[make_status("b", "quote", 2), make_status("a", "quote", 1)],
        )
        assert names(registry, StatusCategory.quote) == ["a", "b"]

    def test_add_appends_with_next_order(self, registry):
        status = registry.add(StatusCategory.order)

        assert status.id.startswith(TEMP_ID_PREFIX)
        assert status.order == 3
        assert status.category == StatusCategory.order
        assert registry.load_all(StatusCategory.order)[-1] == status
        assert len(registry.committed(StatusCategory.order)) == 2
        assert registry.is_dirty

    def test_add_to_empty_category(self):
        status = StatusRegistry().add(StatusCategory.quote)
        assert status.order == 1

    def test_update_merges_only_sent_fields(self, registry):
        assert registry.update("sent", StatusConfigUpdate(label="Sent to customer")) is True

        updated = registry.get("sent")
        assert updated.label == "Sent to customer"
        assert updated.allowed_transitions == ["approved"]
        assert registry.committed(StatusCategory.quote)[1].label == "Sent"

    def test_update_accepts_camel_case_dict(self, registry):
        assert registry.update("paid", {"allowShipping": True, "allowCOD": True}) is True
        assert registry.get("paid").allow_shipping is True
        assert registry.get("paid").allow_cod is True

    def test_update_unknown_id_is_noop(self, registry):
        assert registry.update("ghost", {"label": "x"}) is False
        assert not registry.is_dirty

    def test_update_rejects_null_order(self, registry):
        with pytest.raises(AppException) as exc:
            registry.update("sent", {"order": None})

        assert exc.value.status_code == 422
        assert exc.value.error_code == ErrorCode.STATUS_CONFIG_INVALID
        [error] = exc.value.details["errors"]
        assert error["category"] == "quote"
        assert error["status_id"] == "sent"
        assert error["field"] == "order"

        # draft untouched and still usable
        assert not registry.is_dirty
        assert names(registry, StatusCategory.quote) == ["pending", "sent", "approved"]
        assert registry.validate() == []

    def test_update_rejects_null_transitions(self, registry):
        with pytest.raises(AppException) as exc:
            registry.update("pending", {"allowedTransitions": None})

        assert exc.value.error_code == ErrorCode.STATUS_CONFIG_INVALID
        assert exc.value.details["errors"][0]["field"] == "allowedTransitions"
        assert is_transition_allowed("pending", "sent", registry.all_statuses()) is True

    def test_update_rejects_wrong_type(self, registry):
        with pytest.raises(AppException) as exc:
            registry.update("sent", {"order": "first"})

        assert exc.value.error_code == ErrorCode.STATUS_CONFIG_INVALID
        assert exc.value.details["errors"][0]["field"] == "order"
        assert not registry.is_dirty

    def test_update_null_clears_optional_field(self, registry):
        registry.update("paid", {"allowShipping": True})
        assert registry.update("paid", {"allowShipping": None}) is True
        assert registry.get("paid").allow_shipping is None

    def test_remove_renumbers(self, registry):
        assert registry.remove("pending") is True
        assert [(s.name, s.order) for s in registry.load_all(StatusCategory.quote)] == [
            ("sent", 1),
            ("approved", 2),
        ]

    def test_remove_unknown_id_is_noop(self, registry):
        assert registry.remove("ghost") is False
        assert names(registry, StatusCategory.quote) == ["pending", "sent", "approved"]

    def test_reorder_up(self, registry):
        assert registry.reorder("sent", ReorderDirection.up) is True
        assert [(s.name, s.order) for s in registry.load_all(StatusCategory.quote)] == [
            ("sent", 1),
            ("pending", 2),
            ("approved", 3),
        ]

    def test_reorder_down_accepts_string(self, registry):
        assert registry.reorder("sent", "down") is True
        assert names(registry, StatusCategory.quote) == ["pending", "approved", "sent"]

    def test_reorder_up_then_down_restores_order(self, registry):
        before = registry.load_all(StatusCategory.quote)
        registry.reorder("approved", ReorderDirection.up)
        registry.reorder("approved", ReorderDirection.down)
        assert registry.load_all(StatusCategory.quote) == before
        assert not registry.is_dirty

    def test_reorder_at_boundary_is_noop(self, registry):
        assert registry.reorder("pending", ReorderDirection.up) is False
        assert registry.reorder("approved", ReorderDirection.down) is False
        assert not registry.is_dirty

    def test_reorder_unknown_id_is_noop(self, registry):
        assert registry.reorder("ghost", ReorderDirection.up) is False

    def test_reorder_makes_sparse_orders_dense(self, registry):
        registry.replace_draft(
            [
                make_status("a", "quote", 2),
                make_status("b", "quote", 4),
                make_status("c", "quote", 6),
            ],
            registry.load_all(StatusCategory.order),
        )

        assert registry.reorder("c", ReorderDirection.up) is True
        assert [(s.name, s.order) for s in registry.load_all(StatusCategory.quote)] == [
            ("a", 1),
            ("c", 2),
            ("b", 3),
        ]

    def test_discard_restores_committed(self, registry):
        registry.remove("pending")
        registry.add(StatusCategory.order)
        registry.discard()
        assert not registry.is_dirty
        assert names(registry, StatusCategory.quote) == ["pending", "sent", "approved"]


class TestDiffAndValidate:
    """Test diff() and validate()."""

    def test_diff_lists_added_removed_changed(self, registry):
        added = registry.add(StatusCategory.quote)
        registry.remove("shipped")
        registry.update("pending", {"label": "Waiting"})

        diff = registry.diff()
        assert diff.quote.added == [added.id]
        assert diff.quote.changed == ["pending"]
        assert diff.order.removed == ["shipped"]
        assert diff.summary() == "quote +1 ~1 -0; order +0 ~0 -1"

    def test_clean_registry_has_empty_diff(self, registry):
        assert registry.diff().is_empty
        assert registry.diff().summary() == "no changes"

    def test_new_status_without_name_is_invalid(self, registry):
        added = registry.add(StatusCategory.quote)
        errors = registry.validate()
        assert any(e.status_id == added.id and e.field == "name" for e in errors)

    def test_dangling_transition_is_invalid(self, registry):
        registry.update("approved", {"allowed_transitions": ["ghost"]})
        errors = registry.validate()
        assert [(e.status_id, e.field) for e in errors] == [("approved", "allowedTransitions")]

    def test_cross_category_transition_is_valid(self, registry):
        registry.update("approved", {"allowed_transitions": ["paid"]})
        assert registry.validate() == []


class TestPersist:
    """Test persist() against the database."""

    async def test_round_trip(self, seeded_session):
        registry = await StatusRegistry.load(seeded_session)
        registry.update("sent", {"label": "Quoted", "autoExpireHours": 48})

        diff = await registry.persist(seeded_session, actor="admin@example.com")

        assert diff.quote.changed == ["sent"]
        assert not registry.is_dirty

        stored, version = await status_store.get_statuses(seeded_session, StatusCategory.quote)
        assert stored == registry.load_all(StatusCategory.quote)
        assert version == 2
        assert next(s for s in stored if s.name == "sent").auto_expire_hours == 48

    async def test_new_status_gets_permanent_id(self, seeded_session):
        registry = await StatusRegistry.load(seeded_session)
        added = registry.add(StatusCategory.order)
        registry.update(added.id, {"name": "on_hold", "label": "On hold"})

        await registry.persist(seeded_session)

        stored, _ = await status_store.get_statuses(seeded_session, StatusCategory.order)
        assert stored[-1].id == "on_hold"
        assert stored[-1].order == len(stored)

    async def test_invalid_draft_is_not_written(self, seeded_session):
        registry = await StatusRegistry.load(seeded_session)
        registry.update("pending", {"name": ""})

        with pytest.raises(AppException) as exc:
            await registry.persist(seeded_session)

        assert exc.value.status_code == 422
        assert exc.value.error_code == ErrorCode.STATUS_CONFIG_INVALID
        assert exc.value.details["errors"][0]["field"] == "name"
        assert registry.get("pending").name == ""

        _, version = await status_store.get_statuses(seeded_session, StatusCategory.quote)
        assert version == 1

    async def test_version_conflict_keeps_draft(self, seeded_session):
        first = await StatusRegistry.load(seeded_session)
        second = await StatusRegistry.load(seeded_session)

        first.update("pending", {"label": "First"})
        await first.persist(seeded_session)

        second.update("pending", {"label": "Second"})
        with pytest.raises(AppException) as exc:
            await second.persist(seeded_session)

        assert exc.value.status_code == 409
        assert exc.value.error_code == ErrorCode.STATUS_CONFIG_VERSION_CONFLICT
        assert second.get("pending").label == "Second"
        assert second.is_dirty

        stored, _ = await status_store.get_statuses(seeded_session, StatusCategory.quote)
        assert stored[0].label == "First"

    async def test_write_failure_keeps_draft_and_store(self, seeded_session, monkeypatch):
        registry = await StatusRegistry.load(seeded_session)
        registry.update("pending", {"label": "Unsaved"})

        monkeypatch.setattr(
            seeded_session,
            "commit",
            AsyncMock(side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))),
        )

        with pytest.raises(AppException) as exc:
            await registry.persist(seeded_session)

        assert exc.value.status_code == 503
        assert exc.value.error_code == ErrorCode.STATUS_PERSIST_FAILED
        assert registry.get("pending").label == "Unsaved"
        assert registry.committed(StatusCategory.quote)[0].label == "Pending"
        assert registry.versions["quote_statuses"] == 1

        monkeypatch.undo()
        stored, version = await status_store.get_statuses(seeded_session, StatusCategory.quote)
        assert stored[0].label == "Pending"
        assert version == 1

    async def test_timeout_reports_persist_failure(self, seeded_session, monkeypatch):
        registry = await StatusRegistry.load(seeded_session)
        registry.update("pending", {"label": "Slow"})

        async def slow_put_all(*args, **kwargs):
            await asyncio.sleep(1)

        monkeypatch.setattr(status_registry, "STATUS_PERSIST_TIMEOUT_SECONDS", 0.01)
        monkeypatch.setattr(status_registry.status_store, "put_all", slow_put_all)

        with pytest.raises(AppException) as exc:
            await registry.persist(seeded_session)

        assert exc.value.status_code == 503
        assert exc.value.error_code == ErrorCode.STATUS_PERSIST_FAILED
        assert registry.is_dirty
