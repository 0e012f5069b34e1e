import pytest

from semita.core.errors import InvalidArgument, NotFound
from semita.services.service_status import DEFAULT_SERVICES


def test_seed_default_services_only_writes_missing(service_status, store):
    assert service_status.seed_default_services() == 5
    assert service_status.seed_default_services() == 0

    services = service_status.list_services()
    assert [s.id for s in services] == sorted(d["id"] for d in DEFAULT_SERVICES)
    assert all(s.status == "active" and s.reports_count == 0 for s in services)


def test_seed_keeps_existing_service(service_status):
    service_status.report_status("water", "issue", "Low pressure", "resident1")

    assert service_status.seed_default_services() == 4
    water = service_status.get_service("water")
    assert water.status == "issue"
    assert water.reports_count == 1


def test_report_outage_updates_service_and_emits_alert(service_status, notifications, clock):
    service_status.seed_default_services()

    service = service_status.report_status("water", "outage", "Main line burst", "resident1")

    assert service.status == "outage"
    assert service.description == "Main line burst"
    assert service.reports_count == 1
    assert service.reported_by == "resident1"
    assert service.name == "Water Supply"
    assert service_status.get_service("water").reports_count == 1

    feed = notifications.list()
    assert len(feed) == 1
    assert feed[0].type == "alert"
    assert feed[0].service_id == "water"
    assert feed[0].title == "Water Supply Status Update"
    assert feed[0].message == "Main line burst"
    assert feed[0].read is False


@pytest.mark.parametrize("status, expected_type", [
    ("outage", "alert"),
    ("issue", "warning"),
    ("maintenance", "info"),
    ("active", "info"),
])
def test_notification_type_follows_status(service_status, notifications, status, expected_type):
    service_status.report_status("electricity", status, "update", "resident1")
    assert notifications.list()[0].type == expected_type


def test_report_unknown_service_creates_default_shell(service_status):
    service = service_status.report_status("internet", "issue", "Slow connection", "resident2")

    assert service.id == "internet"
    assert service.name == "internet"
    assert service.icon == "default"
    assert service.reports_count == 1


def test_reports_count_increments_per_report(service_status, clock):
    service_status.report_status("garbage", "issue", "Missed pickup", "a")
    first = service_status.get_service("garbage").last_update
    service_status.report_status("garbage", "active", "Collected", "b")

    garbage = service_status.get_service("garbage")
    assert garbage.reports_count == 2
    assert garbage.status == "active"
    assert garbage.last_update > first


def test_report_invalid_status(service_status, notifications):
    with pytest.raises(InvalidArgument):
        service_status.report_status("water", "exploded", "?", "resident1")
    assert notifications.list() == []


def test_get_missing_service(service_status):
    with pytest.raises(NotFound):
        service_status.get_service("nope")
