import threading
from datetime import datetime, timezone

import pytest

from meeting_notes.exceptions import NotFoundError, ValidationError
from meeting_notes.services.share_store import ShareStore
from meeting_notes.utils.html import escape_text


@pytest.fixture
def store() -> ShareStore:
    return ShareStore()


def test_create_then_get_round_trips_content(store):
    share_id = store.create("Hello **world**")

    entry = store.get(share_id)
    assert entry is not None
    assert entry.content == "Hello **world**"
    assert entry.created_at.tzinfo is not None
    assert share_id in store
    assert len(store) == 1


@pytest.mark.parametrize("content", ["", None, 123, ["list"]])
def test_create_rejects_missing_or_non_string_content(store, content):
    with pytest.raises(ValidationError, match="content"):
        store.create(content)
    assert len(store) == 0


def test_ids_are_unique(store):
    ids = {store.create(f"note {i}") for i in range(200)}
    assert len(ids) == 200


def test_id_collision_is_regenerated():
    issued = iter(["same", "same", "other"])
    store = ShareStore(id_factory=lambda: next(issued))

    first = store.create("first")
    second = store.create("second")

    assert (first, second) == ("same", "other")
    assert store.get("same").content == "first"
    assert store.get("other").content == "second"


def test_render_contains_content_in_pre_block_and_timestamp():
    created = datetime(2024, 5, 17, 9, 30, 0, tzinfo=timezone.utc)
    store = ShareStore(clock=lambda: created)
    share_id = store.create("Hello **world**")

    html = store.render(share_id)

    assert "<pre>Hello **world**</pre>" in html
    assert "Created: 2024-05-17 09:30:00 UTC" in html
    assert html.startswith("<!doctype html>")


def test_render_escapes_markup(store):
    share_id = store.create("<script>alert(1)</script> & more")

    html = store.render(share_id)

    assert "&lt;script&gt;alert(1)&lt;/script&gt; &amp; more" in html
    assert "<script>" not in html


def test_render_is_idempotent(store):
    share_id = store.create("stable")

    assert store.render(share_id) == store.render(share_id)
    assert store.get(share_id).content == "stable"
    assert len(store) == 1


def test_render_unknown_id_raises_not_found(store):
    store.create("something")
    with pytest.raises(NotFoundError):
        store.render("never-issued")


def test_stores_are_isolated():
    a, b = ShareStore(), ShareStore()
    share_id = a.create("only in a")
    assert b.get(share_id) is None


def test_concurrent_creates_do_not_lose_entries(store):
    results: list[str] = []
    results_lock = threading.Lock()

    def worker(n: int) -> None:
        for i in range(50):
            share_id = store.create(f"{n}-{i}")
            with results_lock:
                results.append(share_id)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == len(set(results)) == 400
    assert len(store) == 400


def test_escape_text_only_touches_three_characters():
    assert escape_text('a & b < c > d "quoted" \'single\'') == 'a &amp; b &lt; c &gt; d "quoted" \'single\''
