"""
Tests for the client layer: exclusion sets, the merge rule and optimistic
deletes with rollback.
"""
import json
import time

import httpx
import pytest

from app.client.api_client import ApiClient, ApiError
from app.client.board import BoardSession, merge_active
from app.client.exclusion_store import COMPANIES_NAMESPACE, ExclusionStore


SERVER_JOBS = [{"id": "job-1", "title": "Backend Engineer"}, {"id": "job-2", "title": "Frontend Intern"}]


def test_merge_active_keeps_server_order():
    assert merge_active(SERVER_JOBS, set()) == SERVER_JOBS
    assert merge_active(SERVER_JOBS, {"job-1"}) == [SERVER_JOBS[1]]
    assert merge_active([], {"job-1"}) == []


class TestExclusionStore:
    def test_add_discard_round_trip(self, tmp_path):
        store = ExclusionStore(str(tmp_path))

        store.add("u1", "job-1")
        store.add("u1", "job-2")
        assert store.load("u1") == {"job-1", "job-2"}
        assert store.path_for("u1").name == "deletedJobs_u1.json"
        assert store.load("u2") == set()

        store.discard("u1", "job-1")
        assert store.load("u1") == {"job-2"}

    def test_empty_set_removes_file(self, tmp_path):
        store = ExclusionStore(str(tmp_path))
        store.add("u1", "job-1")
        store.discard("u1", "job-1")

        assert not store.path_for("u1").exists()

    def test_namespaces_do_not_mix(self, tmp_path):
        jobs = ExclusionStore(str(tmp_path))
        companies = ExclusionStore(str(tmp_path), namespace=COMPANIES_NAMESPACE)
        jobs.add("u1", "x")

        assert companies.load("u1") == set()

    def test_corrupt_file_starts_empty(self, tmp_path):
        store = ExclusionStore(str(tmp_path))
        store.path_for("u1").write_text("{not json", encoding="utf-8")
        assert store.load("u1") == set()

        store.path_for("u1").write_text(json.dumps({"job-1": True}), encoding="utf-8")
        assert store.load("u1") == set()

    def test_distinct_user_ids_get_distinct_files(self, tmp_path):
        store = ExclusionStore(str(tmp_path))
        store.add("a/b", "job-1")

        assert store.load("a_b") == set()
        assert store.load("a/b") == {"job-1"}
        assert store.path_for("a/b") != store.path_for("a_b")

    def test_user_id_is_made_file_safe(self, tmp_path):
        store = ExclusionStore(str(tmp_path))
        store.add("../evil/u1", "job-1")

        assert store.path_for("../evil/u1").parent == tmp_path
        assert store.load("../evil/u1") == {"job-1"}


def _mock_api(handler):
    http = httpx.Client(base_url="http://testserver", transport=httpx.MockTransport(handler))
    return ApiClient(http=http)


class TestOptimisticDelete:
    def test_failed_delete_rolls_back(self, tmp_path):
        def handler(request):
            if request.method == "GET":
                return httpx.Response(200, json=SERVER_JOBS)
            return httpx.Response(500, json={"error": "Failed to delete job", "message": "database is locked"})

        notifications = []
        session = BoardSession(_mock_api(handler), "u1", str(tmp_path), notify=lambda title, text: notifications.append((title, text)))
        session.refresh()

        with pytest.raises(ApiError) as exc_info:
            session.delete_job("job-1")

        assert exc_info.value.status_code == 500
        assert [job["id"] for job in session.jobs] == ["job-1", "job-2"]
        assert not session.job_exclusions.contains("u1", "job-1")
        assert notifications == [("Failed to delete job", "database is locked")]

    def test_network_failure_rolls_back(self, tmp_path):
        def handler(request):
            if request.method == "GET":
                return httpx.Response(200, json=SERVER_JOBS)
            raise httpx.ConnectError("connection refused", request=request)

        session = BoardSession(_mock_api(handler), "u1", str(tmp_path), notify=lambda *args: None)
        session.refresh()

        with pytest.raises(ApiError) as exc_info:
            session.delete_job("job-1")

        assert exc_info.value.status_code is None
        assert len(session.jobs) == 2
        assert session.job_exclusions.load("u1") == set()

    def test_failed_retry_keeps_earlier_exclusion(self, tmp_path):
        def handler(request):
            if request.method == "GET":
                return httpx.Response(200, json=SERVER_JOBS)
            return httpx.Response(503, text="Service Unavailable")

        session = BoardSession(_mock_api(handler), "u1", str(tmp_path), notify=lambda *args: None)
        session.job_exclusions.add("u1", "job-1")
        session.refresh()

        with pytest.raises(ApiError):
            session.delete_job("job-1")

        assert session.job_exclusions.contains("u1", "job-1")
        assert [job["id"] for job in session.jobs] == ["job-2"]

    def test_restore_succeeds_when_follow_up_refresh_fails(self, tmp_path):
        def handler(request):
            if request.method == "POST":
                return httpx.Response(200, json={"message": "Post restored successfully", "job": {"id": "job-1"}, "applicationsRemoved": 0})
            return httpx.Response(500, json={"message": "Failed to fetch jobs"})

        session = BoardSession(_mock_api(handler), "u1", str(tmp_path), notify=lambda *args: None)
        session.job_exclusions.add("u1", "job-1")

        result = session.restore_job("dp-1")

        assert result["job"]["id"] == "job-1"
        assert session.job_exclusions.load("u1") == set()

    def test_company_restore_succeeds_when_follow_up_refresh_fails(self, tmp_path):
        def handler(request):
            if request.method == "POST":
                return httpx.Response(200, json={"message": "Company restored successfully", "company": {"id": "company-1"}})
            raise httpx.ConnectError("connection refused", request=request)

        session = BoardSession(_mock_api(handler), "u1", str(tmp_path), notify=lambda *args: None)
        session.company_exclusions.add("u1", "company-1")

        assert session.restore_company("dc-1")["company"]["id"] == "company-1"
        assert session.company_exclusions.load("u1") == set()

    def test_error_message_prefers_message_key(self, tmp_path):
        def handler(request):
            return httpx.Response(404, json={"error": "Job not found", "message": "Job not found", "success": False})

        api = _mock_api(handler)
        with pytest.raises(ApiError) as exc_info:
            api.soft_delete_job("job-404", "u1")

        assert exc_info.value.message == "Job not found"
        assert exc_info.value.status_code == 404


class TestBoardAgainstServer:
    @pytest.fixture
    def session(self, client, tmp_path):
        return BoardSession(ApiClient(http=client), "u1", str(tmp_path), notify=lambda *args: None)

    def test_delete_hides_job_locally_and_on_server(self, session, job, other_job):
        assert {j["id"] for j in session.refresh()} == {"job-1", "job-2"}

        result = session.delete_job("job-1")

        assert result["alreadyDeleted"] is False
        assert [j["id"] for j in session.jobs] == ["job-2"]
        assert session.job_exclusions.contains("u1", "job-1")
        assert [j["id"] for j in session.api.list_jobs(user_id="u1")] == ["job-2"]

    def test_local_exclusion_wins_over_server(self, session, job):
        # Hidden locally while the server has no trash record for it yet
        session.job_exclusions.add("u1", "job-1")

        assert [j["id"] for j in session.api.list_jobs(user_id="u1")] == ["job-1"]
        assert session.refresh() == []

    def test_permanent_delete_keeps_job_hidden_without_local_state(self, session, job, tmp_path):
        session.refresh()
        session.delete_job("job-1")
        session.api.permanently_delete_post(session.deleted_posts()[0]["id"])

        fresh = BoardSession(session.api, "u1", str(tmp_path / "other-device"), notify=lambda *args: None)
        assert fresh.refresh() == []

    def test_restore_unhides_job(self, session, job):
        session.refresh()
        session.delete_job("job-1")
        deleted_post_id = session.deleted_posts()[0]["id"]

        result = session.restore_job(deleted_post_id)

        assert result["job"]["id"] == "job-1"
        assert [j["id"] for j in session.jobs] == ["job-1"]
        assert session.job_exclusions.load("u1") == set()
        assert session.deleted_posts() == []

    def test_failed_restore_keeps_job_hidden(self, session, job):
        session.refresh()
        session.delete_job("job-1")

        with pytest.raises(ApiError) as exc_info:
            session.restore_job("missing")

        assert exc_info.value.status_code == 404
        assert session.job_exclusions.contains("u1", "job-1")

    def test_company_delete_and_restore(self, session, company):
        assert [c["id"] for c in session.refresh_companies()] == ["company-1"]

        session.delete_company("company-1")
        assert session.companies == []
        deleted = session.api.get_deleted_companies(user_id="u1")
        assert [record["originalId"] for record in deleted] == ["company-1"]

        session.restore_company(deleted[0]["id"])
        assert [c["id"] for c in session.companies] == ["company-1"]
        assert session.company_exclusions.load("u1") == set()

    def test_apply_round_trip(self, session, job):
        application = session.api.create_application("u1", "job-1")

        assert [a["id"] for a in session.api.get_user_applications("u1")] == [application["id"]]
        session.api.delete_application(application["id"])
        assert session.api.get_user_applications("u1") == []


def test_poll_stops_when_event_is_set(tmp_path):
    calls = []

    def handler(request):
        calls.append(request.url.path)
        if len(calls) == 2:
            return httpx.Response(500, json={"message": "boom"})
        return httpx.Response(200, json=SERVER_JOBS)

    session = BoardSession(_mock_api(handler), "u1", str(tmp_path), notify=lambda *args: None)
    stop_event = session.start_polling(interval=0.01)
    for _ in range(500):
        if len(calls) >= 3:
            break
        time.sleep(0.01)
    stop_event.set()

    # A failed tick does not stop polling
    assert len(calls) >= 3
    assert [j["id"] for j in session.jobs] == ["job-1", "job-2"]
