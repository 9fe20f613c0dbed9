"""Unit tests for SearchController: when the filter is recomputed and what it returns."""

from contactbook.application import ContactBookState, SearchController
from contactbook.domain import Contact

ANN = Contact(id=1, name="Ann", address="1 St", postal_code="A1", city="X")
BOB = Contact(id=2, name="Bob", address="2 Rd", postal_code="B2", city="Y")


class RecordingSearch:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def __call__(self, contacts, text):
        self.calls.append(text)
        return [c for c in contacts if c.name.lower().startswith(text.lower())]


def test_text_change_shifts_current_into_previous() -> None:
    controller = SearchController()
    controller.on_text_change("a")
    controller.on_text_change("an")
    assert controller.state.query.previous_text == "a"
    assert controller.state.query.current_text == "an"


def test_no_change_means_no_filter_and_full_list_visible() -> None:
    search = RecordingSearch()
    controller = SearchController(search=search)
    contacts = [ANN, BOB]
    assert controller.evaluate(contacts) is None
    assert controller.visible(contacts) is contacts
    assert search.calls == []


def test_non_empty_text_uses_the_index() -> None:
    controller = SearchController()
    contacts = [ANN, BOB]
    controller.on_text_change("An")
    assert controller.evaluate(contacts) == [ANN]
    assert controller.visible(contacts) == [ANN]


def test_empty_text_returns_the_full_set_without_searching() -> None:
    search = RecordingSearch()
    controller = SearchController(search=search)
    contacts = [ANN, BOB]
    controller.on_text_change("b")
    controller.evaluate(contacts)
    controller.on_text_change("")
    assert controller.evaluate(contacts) is contacts
    assert search.calls == ["b"]


def test_result_is_cached_until_the_next_change() -> None:
    search = RecordingSearch()
    controller = SearchController(search=search)
    contacts = [ANN, BOB]
    controller.on_text_change("b")
    first = controller.evaluate(contacts)
    second = controller.evaluate(contacts)
    assert first is second
    assert search.calls == ["b"]


def test_missing_contact_set_defers_evaluation() -> None:
    search = RecordingSearch()
    controller = SearchController(search=search)
    controller.on_text_change("b")
    assert controller.evaluate(None) is None
    assert controller.visible(None) is None

    contacts = [ANN, BOB]
    assert controller.evaluate(contacts) == [BOB]
    assert search.calls == ["b"]


def test_replaced_contact_set_is_filtered_again() -> None:
    search = RecordingSearch()
    controller = SearchController(search=search)
    controller.on_text_change("b")
    controller.evaluate([ANN])
    refreshed = [ANN, BOB]
    assert controller.evaluate(refreshed) == [BOB]
    assert search.calls == ["b", "b"]


def test_same_text_twice_is_not_a_change() -> None:
    search = RecordingSearch()
    controller = SearchController(search=search)
    contacts = [ANN, BOB]
    controller.on_text_change("b")
    controller.evaluate(contacts)
    controller.on_text_change("b")
    assert controller.evaluate(contacts) == [BOB]
    assert search.calls == ["b"]


def test_state_is_shared_by_reference() -> None:
    state = ContactBookState()
    controller = SearchController(state)
    controller.on_text_change("a")
    controller.evaluate([ANN])
    assert state.query.current_text == "a"
    assert state.filtered == [ANN]


def test_empty_result_is_shown_as_empty() -> None:
    controller = SearchController()
    contacts = [ANN, BOB]
    controller.on_text_change("zzz")
    controller.evaluate(contacts)
    assert controller.visible(contacts) == []
