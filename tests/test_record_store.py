import pytest

from person_registry.app.core.errors import NotFoundError
from person_registry.app.services.search import matches_query


def test_load_replaces_records_and_resets_filter(store, people, ana):
    store.load([ana])
    store.apply_filter(matches_query("zz"))

    store.load(people)

    assert store.records == tuple(people)
    assert store.filtered == tuple(people)
    assert len(store) == 4


def test_load_rejects_duplicate_ids(store, make_person):
    with pytest.raises(ValueError):
        store.load([make_person(1), make_person(1, name="Other")])


def test_add_appends_to_both_lists(store, people, make_person):
    store.load(people)
    store.apply_filter(matches_query("bruno"))
    new = make_person(10, name="Zelia", email="zelia@x.com")

    store.add(new)

    assert store.records[-1] is new
    assert [person.id for person in store.filtered] == [2, 10]
    assert len(store) == 5


def test_add_rejects_known_id(store, people, make_person):
    store.load(people)
    with pytest.raises(ValueError):
        store.add(make_person(2))
    assert len(store) == 4


def test_update_replaces_in_place(store, people, make_person):
    store.load(people)
    store.apply_filter(matches_query("example.com"))
    changed = make_person(3, name="Carla Souza", email="carla@example.com")

    store.update(3, changed)

    assert [person.id for person in store.records] == [1, 2, 3, 4]
    assert store.records[2] is changed
    assert store.filtered[1] is changed
    assert len(store) == 4


def test_update_outside_filtered_view_only_touches_records(store, people, make_person):
    store.load(people)
    store.apply_filter(matches_query("bruno"))

    store.update(1, make_person(1, name="Ana Maria"))

    assert store.get(1).name == "Ana Maria"
    assert [person.id for person in store.filtered] == [2]


def test_update_unknown_id_raises_not_found(store, people, make_person):
    store.load(people)

    with pytest.raises(NotFoundError) as excinfo:
        store.update(99, make_person(99))

    assert excinfo.value.person_id == 99
    assert store.records == tuple(people)
    assert store.filtered == tuple(people)


def test_remove_drops_from_both_lists(store, people):
    store.load(people)
    store.apply_filter(matches_query("ana"))

    removed = store.remove(3)

    assert removed.id == 3
    assert 3 not in store
    assert [person.id for person in store.records] == [1, 2, 4]
    assert [person.id for person in store.filtered] == [1]


def test_remove_unknown_id_leaves_lists_unchanged(store, people):
    store.load(people)
    store.apply_filter(matches_query("ana"))
    filtered = store.filtered

    with pytest.raises(NotFoundError):
        store.remove(42)

    assert store.records == tuple(people)
    assert store.filtered == filtered


def test_filtered_view_is_subset_of_records(store, people, make_person):
    store.load(people)
    store.apply_filter(matches_query("a"))
    store.add(make_person(5, name="Eva", email="eva@x.com"))
    store.update(1, make_person(1, name="Ana Paula"))
    store.remove(2)

    for person in store.filtered:
        assert store.get(person.id) is person


def test_get_unknown_id_raises(store):
    with pytest.raises(NotFoundError):
        store.get(1)
