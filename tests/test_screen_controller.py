import asyncio

import pytest

from person_registry.app.core.errors import NotFoundError
from person_registry.app.services.form_controller import FormMode
from person_registry.app.services.screen_controller import ScreenController


async def test_start_loads_people(screen, ana):
    assert await screen.start() is True

    assert screen.people == (ana,)
    assert screen.store.records == (ana,)
    assert screen.load_error is None


async def test_start_failure_leaves_list_empty(screen, service, notifier):
    service.fail.add("list")

    assert await screen.start() is False

    assert screen.people == ()
    assert len(screen.store) == 0
    assert "service unavailable" in screen.load_error
    assert notifier.last.level == "error"


async def test_search_scenario(screen, ana):
    await screen.start()

    assert screen.search("an") == (ana,)
    assert screen.search("zz") == ()
    assert screen.store.records == (ana,)
    assert screen.search("") == (ana,)


async def test_edit_scenario(screen, service):
    await screen.start()

    screen.open_edit(1)
    screen.form.set_field("email", "ana2@x.com")
    await screen.submit_form()

    assert screen.store.get(1).email == "ana2@x.com"
    assert screen.form.mode is FormMode.CLOSED
    assert service.calls == ["list", "update"]


async def test_create_updates_locally_without_reload(screen, service, valid_fields):
    await screen.start()
    screen.search("zz")

    screen.open_new()
    for name, value in valid_fields.items():
        screen.form.set_field(name, value)
    person = await screen.submit_form()

    assert len(screen.store) == 2
    assert screen.store.get(person.id).name == "Bruno Lima"
    assert screen.people == (person,)
    assert service.calls == ["list", "create"]


async def test_delete_removes_from_both_lists(fake_service_cls, make_person, notifier):
    service = fake_service_cls([make_person(1), make_person(2, name="Anabel", email="anabel@x.com")])
    screen = ScreenController(service, notifier=notifier)
    await screen.start()
    screen.search("ana")

    assert await screen.delete(2) is True

    assert 2 not in screen.store
    assert len(screen.store) == 1
    assert [person.id for person in screen.people] == [1]
    assert notifier.last.text == "Person deleted successfully"


async def test_delete_unknown_id_raises_not_found(screen, service, ana):
    await screen.start()

    with pytest.raises(NotFoundError):
        await screen.delete(99)

    assert screen.store.records == (ana,)
    assert screen.people == (ana,)
    assert service.calls == ["list"]


async def test_delete_failure_leaves_state_unchanged(screen, service, notifier, ana):
    await screen.start()
    service.fail.add("delete")

    assert await screen.delete(1) is False

    assert screen.store.records == (ana,)
    assert notifier.last.text == "Error deleting person"


async def test_delete_closes_form_on_that_record(screen):
    await screen.start()
    screen.open_edit(1)

    await screen.delete(1)

    assert screen.form.mode is FormMode.CLOSED


async def test_open_edit_unknown_id(screen):
    await screen.start()
    with pytest.raises(NotFoundError):
        screen.open_edit(5)
    assert screen.form.mode is FormMode.CLOSED


async def test_close_form(screen):
    await screen.start()
    screen.open_new()
    screen.close_form()
    assert not screen.form.is_open


async def test_reload_keeps_query(screen, service, make_person):
    await screen.start()
    screen.search("bea")
    service.people[2] = make_person(2, name="Beatriz", email="bea@x.com")

    assert await screen.reload() is True

    assert len(screen.store) == 2
    assert [person.id for person in screen.people] == [2]


async def test_failed_reload_keeps_data(screen, service, notifier, ana):
    await screen.start()
    service.fail.add("list")

    assert await screen.reload() is False

    assert screen.store.records == (ana,)
    assert notifier.last.text == "Error loading people"


async def test_create_resolving_after_reload_does_not_duplicate(screen, service, notifier, valid_fields):
    await screen.start()
    screen.open_new()
    for name, value in valid_fields.items():
        screen.form.set_field(name, value)

    # The create commits on the server and then waits; a reload lands in between.
    service.gate = asyncio.Event()
    service.gate_after_commit = True
    submit = asyncio.create_task(screen.submit_form())
    while "create" not in service.calls:
        await asyncio.sleep(0)
    service.gate_after_commit = False
    gate, service.gate = service.gate, None
    assert await screen.reload() is True
    assert len(screen.store) == 2
    gate.set()

    person = await submit

    assert person.id == 2
    assert [record.id for record in screen.store.records] == [1, 2]
    assert screen.form.mode is FormMode.CLOSED
    assert notifier.last.text == "Person added successfully"
    assert service.calls == ["list", "create", "list"]
