"""
Unit tests for ProjectStore.

Runs against the in-memory adapter; no I/O.
"""

import asyncio
import datetime
from decimal import Decimal

import pytest

from truefreelance.adapters.memory import InMemoryProjectAdapter
from truefreelance.core.errors import (
    ProjectNotFoundError,
    ProjectValidationError,
    StorageError,
    ValidationErrorKind,
)
from truefreelance.services.project_store import ProjectStore

from conftest import UTC, project_input, stored_project

run = asyncio.run


# --- Add ---


def test_add_derives_hourly_rate(store):
    project = run(store.add(project_input(hours_worked="10", money_received="500")))

    found = store.get_by_id(project.id)
    assert found == project
    assert found.hourly_rate == Decimal("50")


def test_add_with_zero_hours_has_zero_rate(store):
    project = run(store.add(project_input(hours_worked="0", money_received="250")))

    assert project.hourly_rate == Decimal("0")


def test_add_sets_timestamps_and_id(store):
    project = run(store.add(project_input()))

    assert project.id
    assert project.created_at == project.updated_at
    assert project.created_at.tzinfo is not None


def test_add_prepends_newest_first(store):
    first = run(store.add(project_input(name="First")))
    second = run(store.add(project_input(name="Second")))

    assert [p.id for p in store.projects] == [second.id, first.id]


def test_add_trims_name(store):
    project = run(store.add(project_input(name="  Website  ")))

    assert project.name == "Website"


def test_add_invalid_input_leaves_collection_unchanged(store, adapter):
    with pytest.raises(ProjectValidationError) as exc_info:
        run(store.add({"name": "", "hours_worked": -1, "money_received": -1, "completion_date": None}))

    assert len(exc_info.value.issues) == 4
    assert len(store) == 0
    assert run(adapter.load_all()) == []


def test_add_storage_failure_fabricates_nothing(store, adapter):
    adapter.failing = True

    with pytest.raises(StorageError):
        run(store.add(project_input()))

    assert store.projects == ()


# --- Update ---


def test_update_same_fields_refreshes_updated_at_only(store):
    original = run(store.add(project_input()))

    updated = run(store.update(original.id, project_input()))

    assert updated.id == original.id
    assert updated.created_at == original.created_at
    assert updated.updated_at > original.updated_at


def test_round_trip_update_is_numerically_equal(store):
    original = run(store.add(project_input(hours_worked="7.5", money_received="300")))

    run(store.update(original.id, original.editable_fields()))
    fetched = store.get_by_id(original.id)

    assert fetched.model_dump(exclude={"updated_at"}) == original.model_dump(exclude={"updated_at"})


def test_update_recomputes_rate(store):
    original = run(store.add(project_input(hours_worked="10", money_received="500")))

    updated = run(store.update(original.id, project_input(hours_worked="20", money_received="500")))

    assert updated.hourly_rate == Decimal("25")
    assert store.get_by_id(original.id).hourly_rate == Decimal("25")


def test_update_keeps_position(store):
    oldest = run(store.add(project_input(name="Oldest")))
    middle = run(store.add(project_input(name="Middle")))
    newest = run(store.add(project_input(name="Newest")))

    run(store.update(oldest.id, project_input(name="Oldest, renamed")))

    assert [p.id for p in store.projects] == [newest.id, middle.id, oldest.id]
    assert store.projects[-1].name == "Oldest, renamed"


def test_update_is_full_replace(store):
    original = run(store.add(project_input(name="Draft", completion_date="2024-01-10")))

    updated = run(
        store.update(
            original.id,
            project_input(name="Final", hours_worked="4", money_received="100", completion_date="2024-02-01"),
        )
    )

    assert updated.name == "Final"
    assert updated.hours_worked == Decimal("4")
    assert updated.money_received == Decimal("100")
    assert updated.completion_date == datetime.date(2024, 2, 1)


def test_update_unknown_id(store):
    with pytest.raises(ProjectNotFoundError):
        run(store.update("missing", project_input()))


def test_update_not_found_checked_before_validation(store):
    with pytest.raises(ProjectNotFoundError):
        run(store.update("missing", {"name": ""}))


def test_update_invalid_input_keeps_record(store):
    original = run(store.add(project_input()))

    with pytest.raises(ProjectValidationError) as exc_info:
        run(store.update(original.id, project_input(hours_worked="-2")))

    assert exc_info.value.kinds == {ValidationErrorKind.INVALID_HOURS}
    assert store.get_by_id(original.id) == original


def test_update_storage_failure_keeps_record(store, adapter):
    original = run(store.add(project_input()))
    adapter.failing = True

    with pytest.raises(StorageError):
        run(store.update(original.id, project_input(name="Changed")))

    assert store.get_by_id(original.id) == original


# --- Remove ---


def test_remove(store):
    keep = run(store.add(project_input(name="Keep")))
    drop = run(store.add(project_input(name="Drop")))

    run(store.remove(drop.id))

    assert store.get_by_id(drop.id) is None
    assert store.projects == (keep,)


def test_remove_unknown_id_leaves_length(store):
    run(store.add(project_input()))

    with pytest.raises(ProjectNotFoundError):
        run(store.remove("missing"))

    assert len(store) == 1


def test_remove_storage_failure_keeps_record(store, adapter):
    project = run(store.add(project_input()))
    adapter.failing = True

    with pytest.raises(StorageError):
        run(store.remove(project.id))

    assert store.get_by_id(project.id) == project


def test_confirmation_prompt_names_project(store):
    project = run(store.add(project_input(name="Logo redesign")))

    assert store.confirmation_prompt(project.id) == 'Are you sure you want to delete "Logo redesign"?'


def test_confirmation_prompt_unknown_id(store):
    with pytest.raises(ProjectNotFoundError):
        store.confirmation_prompt("missing")


# --- Load ---


def test_load_all_sorts_newest_first():
    older = stored_project("a", created_at=datetime.datetime(2024, 1, 1, tzinfo=UTC))
    newer = stored_project("b", created_at=datetime.datetime(2024, 3, 1, tzinfo=UTC))
    store = ProjectStore(InMemoryProjectAdapter(initial=[older, newer]))

    loaded = run(store.load_all())

    assert [p.id for p in loaded] == ["b", "a"]
    assert [p.id for p in store.projects] == ["b", "a"]


def test_load_all_fills_missing_rate():
    store = ProjectStore(InMemoryProjectAdapter(initial=[stored_project("a", hours="4", money="100")]))

    run(store.load_all())

    assert store.get_by_id("a").hourly_rate == Decimal("25")


def test_load_all_keeps_store_supplied_rate():
    server_rounded = stored_project("a", hours="3", money="100").model_copy(
        update={"hourly_rate": Decimal("33.33")}
    )
    store = ProjectStore(InMemoryProjectAdapter(initial=[server_rounded]))

    run(store.load_all())

    assert store.get_by_id("a").hourly_rate == Decimal("33.33")


def test_load_all_failure_empties_collection(store, adapter):
    run(store.add(project_input()))
    adapter.fail_load = True

    with pytest.raises(StorageError):
        run(store.load_all())

    assert store.projects == ()


def test_get_by_id_unknown_returns_none(store):
    assert store.get_by_id("missing") is None


# --- Ordering ---


def test_concurrent_adds_apply_in_issue_order(store):
    async def add_many():
        return await asyncio.gather(*(store.add(project_input(name=f"Job {i}")) for i in range(5)))

    added = run(add_many())

    assert [p.id for p in store.projects] == [p.id for p in reversed(added)]
