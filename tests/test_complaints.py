import pytest

from semita.core.errors import InvalidArgument, NotFound
from semita.storage.base import COMPLAINT_PREFIX


def _leak(complaints):
    return complaints.submit("Leak", "Water Supply", "Pipe burst", "Block A")


def test_submit_complaint_end_to_end(complaints, notifications, store):
    before = len(complaints.list_complaints())

    complaint = _leak(complaints)

    ledger = complaints.list_complaints()
    assert len(ledger) == before + 1
    assert complaint.status == "open"
    assert complaint.upvotes == 0
    assert complaint.downvotes == 0
    assert complaint.comments == []
    assert complaint.location == "Block A"

    feed = notifications.list()
    assert len(feed) == 1
    assert feed[0].type == "info"
    assert feed[0].complaint_id == complaint.id
    assert feed[0].title == "New Complaint Submitted"
    assert feed[0].message == "Leak - Water Supply"

    stored = store.get(f"{COMPLAINT_PREFIX}{complaint.id}")
    assert "userVote" not in stored


@pytest.mark.parametrize("title, category, description", [
    ("", "Water Supply", "Pipe burst"),
    ("   ", "Water Supply", "Pipe burst"),
    ("Leak", "", "Pipe burst"),
    ("Leak", "Water Supply", ""),
])
def test_submit_requires_fields_and_does_not_mutate(complaints, notifications, title, category, description):
    with pytest.raises(InvalidArgument):
        complaints.submit(title, category, description, "Block A")

    assert complaints.list_complaints() == []
    assert notifications.list() == []


def test_location_is_optional(complaints):
    complaint = complaints.submit("Noise", "Security", "Loud party", None)
    assert complaint.location is None


def test_list_sorted_newest_first(complaints, clock):
    first = complaints.submit("First", "Other", "one")
    second = complaints.submit("Second", "Other", "two")
    third = complaints.submit("Third", "Other", "three")

    assert [c.id for c in complaints.list_complaints()] == [third.id, second.id, first.id]


def test_list_by_status(complaints, clock):
    open_one = complaints.submit("Open", "Other", "still open")
    progressing = complaints.submit("Working", "Other", "in progress")
    complaints.set_status(progressing.id, "in-progress")

    assert [c.id for c in complaints.list_by_status("open")] == [open_one.id]
    assert [c.id for c in complaints.list_by_status("in-progress")] == [progressing.id]
    assert complaints.list_by_status("resolved") == []


def test_list_by_invalid_status(complaints):
    with pytest.raises(InvalidArgument):
        complaints.list_by_status("closed")



def test_list_by_status_uses_store_query(complaints, store, clock):
    complaints.submit("Open", "Other", "still open")
    queries = []
    original = store.query

    def spy(prefix, field, value):
        queries.append((prefix, field, value))
        return original(prefix, field, value)

    store.query = spy
    complaints.list_by_status("open")

    assert (COMPLAINT_PREFIX, "status", "open") in queries


def test_list_page_walks_every_complaint(complaints, clock):
    submitted = [complaints.submit(f"Complaint {i}", "Other", "details") for i in range(7)]
    newest_first = [c.id for c in reversed(submitted)]

    first, cursor = complaints.list_page(limit=5)
    assert [c.id for c in first] == newest_first[:5]
    assert cursor == newest_first[4]

    second, cursor = complaints.list_page(limit=5, after=cursor)
    assert [c.id for c in second] == newest_first[5:]
    assert cursor is None


def test_list_page_exact_boundary_and_exhausted_cursor(complaints, clock):
    submitted = [complaints.submit(f"Complaint {i}", "Other", "details") for i in range(5)]

    page, cursor = complaints.list_page()
    assert len(page) == 5
    assert cursor is None

    rest, cursor = complaints.list_page(after=submitted[0].id)
    assert rest == []
    assert cursor is None


def test_list_page_errors(complaints):
    with pytest.raises(InvalidArgument):
        complaints.list_page(limit=0)
    with pytest.raises(InvalidArgument):
        complaints.list_page(after="missing")

def test_add_comment_appends_in_order(complaints, clock):
    complaint = _leak(complaints)

    first = complaints.add_comment(complaint.id, "Resident A", "Same here")
    second = complaints.add_comment(complaint.id, "Resident B", "Plumber is coming")

    assert first.id == f"{complaint.id}-1"
    assert second.id == f"{complaint.id}-2"
    stored = complaints.get_complaint(complaint.id)
    assert [c.content for c in stored.comments] == ["Same here", "Plumber is coming"]
    assert [c.author for c in stored.comments] == ["Resident A", "Resident B"]


def test_add_comment_defaults_author(complaints):
    complaint = _leak(complaints)
    comment = complaints.add_comment(complaint.id, "  ", "Anyone?")
    assert comment.author == "Anonymous"


def test_add_comment_missing_complaint(complaints):
    with pytest.raises(NotFound):
        complaints.add_comment("nope", "Resident A", "Hello")


@pytest.mark.parametrize("content", ["", "   ", "\n\t"])
def test_add_comment_rejects_blank_content(complaints, content):
    complaint = _leak(complaints)
    with pytest.raises(InvalidArgument):
        complaints.add_comment(complaint.id, "Resident A", content)
    assert complaints.get_complaint(complaint.id).comments == []


def test_set_status_any_transition(complaints):
    complaint = _leak(complaints)

    assert complaints.set_status(complaint.id, "resolved").status == "resolved"
    assert complaints.set_status(complaint.id, "open").status == "open"
    assert complaints.set_status(complaint.id, "in-progress").status == "in-progress"
    assert complaints.set_status(complaint.id, "resolved").status == "resolved"


def test_set_status_resolved_stamps_and_notifies(complaints, notifications, clock):
    complaint = _leak(complaints)

    resolved = complaints.set_status(complaint.id, "resolved")
    assert resolved.resolved_at is not None

    feed = notifications.list()
    assert feed[0].type == "success"
    assert feed[0].complaint_id == complaint.id

    # re-resolving is a no-op for notifications
    complaints.set_status(complaint.id, "resolved")
    assert len(notifications.list()) == 2

    reopened = complaints.set_status(complaint.id, "open")
    assert reopened.resolved_at is None


def test_set_status_errors(complaints):
    complaint = _leak(complaints)
    with pytest.raises(InvalidArgument):
        complaints.set_status(complaint.id, "done")
    with pytest.raises(NotFound):
        complaints.set_status("nope", "open")


def test_get_complaint_missing(complaints):
    with pytest.raises(NotFound):
        complaints.get_complaint("nope")


def test_viewer_vote_is_derived(complaints, votes):
    complaint = _leak(complaints)
    other = complaints.submit("Noise", "Security", "Loud party")
    votes.vote(complaint.id, "alice", "down")

    by_id = {c.id: c for c in complaints.list_complaints(viewer_id="alice")}
    assert by_id[complaint.id].user_vote == "down"
    assert by_id[other.id].user_vote is None

    assert all(c.user_vote is None for c in complaints.list_complaints())
    assert complaints.get_complaint(complaint.id, viewer_id="alice").user_vote == "down"
    assert complaints.get_complaint(complaint.id, viewer_id="bob").user_vote is None
