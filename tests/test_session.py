"""Tests for session pagination, book toggling and context lookup."""

from __future__ import annotations

import pytest

from middle_earth_search.search import UnknownBookError
from middle_earth_search.session import PAGE_SIZE, SearchSession, SessionBusyError


@pytest.fixture()
def big_corpus(make_corpus):
    books = ["The Fellowship of the Ring", "The Two Towers", "The Return of the King"]
    rows = []
    for i in range(23):
        x = 1.0 - i / 25.0
        rows.append((f"Paragraph number {i} of the tale.", books[i % 3], [x, (1.0 - x * x) ** 0.5]))
    return make_corpus(rows)


@pytest.fixture()
def session(big_corpus, make_embedder) -> SearchSession:
    return SearchSession(
        big_corpus,
        make_embedder(table={"tale": [1.0, 0.0], "elves": [1.0, 0.0]}),
    )


def test_initial_page_shows_five_results(session) -> None:
    visible = session.search("elves")

    assert len(session.results) == 23
    assert len(visible) == PAGE_SIZE == 5
    assert session.has_more


@pytest.mark.parametrize("loads, expected", [(1, 10), (2, 15), (4, 23), (6, 23)])
def test_load_more_grows_window_by_five_up_to_total(session, loads, expected) -> None:
    session.search("elves")
    for _ in range(loads):
        session.load_more()

    assert len(session.visible_results) == min(5 + 5 * loads, 23) == expected


def test_new_search_resets_window(session) -> None:
    session.search("elves")
    session.load_more()
    session.load_more()

    session.select_books(["The Two Towers"])
    visible = session.search("tale")

    assert session.visible_limit == 5
    assert len(visible) == 5
    assert len(session.results) == 8
    assert {r.book for r in session.results} == {"The Two Towers"}


def test_small_result_set_shows_everything(make_corpus, make_embedder) -> None:
    corpus = make_corpus(
        [
            ("Sam cooked the coneys with herbs.", "The Two Towers", [1.0, 0.0]),
            ("Faramir spared the hobbits.", "The Two Towers", [0.0, 1.0]),
        ]
    )
    session = SearchSession(corpus, make_embedder(table={"coneys": [1.0, 0.0]}))

    visible = session.search("coneys")

    assert [r.id for r in visible] == [0, 1]
    assert not session.has_more


def test_empty_query_keeps_previous_results(session) -> None:
    session.search("elves")
    before = session.results

    session.search("")

    assert session.results == before
    assert session.query == "elves"


def test_toggle_book_adds_and_removes(session) -> None:
    assert session.toggle_book("the two towers") == frozenset(
        {"The Fellowship of the Ring", "The Return of the King"}
    )
    assert "The Two Towers" in session.toggle_book("The Two Towers")

    with pytest.raises(UnknownBookError):
        session.toggle_book("The Silmarillion")


def test_search_while_searching_is_rejected(session) -> None:
    session.status = "searching"

    with pytest.raises(SessionBusyError):
        session.search("elves")


def test_status_returns_to_ready_after_failure(big_corpus, make_embedder) -> None:
    session = SearchSession(big_corpus, make_embedder(table={"orc": [1.0, 0.0, 0.0]}))

    with pytest.raises(ValueError):
        session.search("orc")

    assert session.status == "ready"


def test_context_at_corpus_edges(session, big_corpus) -> None:
    first = session.context(0)
    last = session.context(len(big_corpus) - 1)
    middle = session.context(7)

    assert first.previous is None and first.next.id == 1
    assert last.next is None and last.previous.id == len(big_corpus) - 2
    assert (middle.previous.id, middle.current.id, middle.next.id) == (6, 7, 8)


def test_context_ignores_book_filter(session) -> None:
    session.select_books(["The Two Towers"])
    results = session.search("tale")
    hit = next(r for r in results if r.id == 4)

    context = session.context(hit.id)

    assert context.current.book == "The Two Towers"
    assert context.previous.book == "The Fellowship of the Ring"
    assert context.next.book == "The Return of the King"


def test_context_unknown_id_raises(session) -> None:
    with pytest.raises(KeyError):
        session.context(99)
    with pytest.raises(KeyError):
        session.context(-1)


def test_search_with_books_commits_selection(session) -> None:
    results = session.search("tale", ["the two towers"])

    assert session.selected_books == frozenset({"The Two Towers"})
    assert {r.book for r in results} == {"The Two Towers"}


def test_empty_query_with_books_keeps_selection(session) -> None:
    session.search("elves")

    session.search("", ["The Two Towers"])

    assert session.selected_books == frozenset(session.corpus.books)
    assert len(session.results) == 23


def test_failed_search_keeps_selection(big_corpus, make_embedder) -> None:
    session = SearchSession(big_corpus, make_embedder(table={"orc": [1.0, 0.0, 0.0]}))

    with pytest.raises(ValueError):
        session.search("orc", ["The Two Towers"])

    assert session.selected_books == frozenset(big_corpus.books)


def test_search_with_unknown_book_keeps_selection(session) -> None:
    with pytest.raises(UnknownBookError):
        session.search("tale", ["The Hobbit"])

    assert session.selected_books == frozenset(session.corpus.books)
