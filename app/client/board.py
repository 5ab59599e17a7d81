"""
Client-side view of the job board for one user.

Three sources can disagree about what the user should see: the server's
active list, the list this session last fetched, and the persisted
exclusion set. merge_active() is the single rule that settles it: an id in
the exclusion set stays hidden until a restore for it succeeds, whatever
the server reports.
"""
import logging
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from app.client.api_client import ApiClient, ApiError
from app.client.exclusion_store import COMPANIES_NAMESPACE, JOBS_NAMESPACE, ExclusionStore

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 3.0

Notifier = Callable[[str, str], None]


def merge_active(server_items: Iterable[Dict[str, Any]], excluded_ids: Set[str]) -> List[Dict[str, Any]]:
    """
    Server items minus anything the user hid locally.

    Order of the server list is kept.
    """
    visible = []
    for item in server_items:
        if item.get("id") in excluded_ids:
            logger.debug(f"Server lists {item.get('id')} as active; keeping it hidden locally")
            continue
        visible.append(item)
    return visible


def _log_notification(title: str, description: str):
    logger.warning(f"{title}: {description}")


class BoardSession:
    """
    Jobs and companies visible to one user, kept in step with the server.

    Deletes are optimistic: the item disappears and is added to the
    exclusion set before the request goes out, and both changes are undone
    if the request fails.
    """

    def __init__(
        self,
        api: ApiClient,
        user_id: str,
        state_dir: Optional[str] = None,
        notify: Optional[Notifier] = None,
    ):
        self.api = api
        self.user_id = user_id
        self.job_exclusions = ExclusionStore(state_dir, namespace=JOBS_NAMESPACE)
        self.company_exclusions = ExclusionStore(state_dir, namespace=COMPANIES_NAMESPACE)
        self.notify = notify or _log_notification
        self.jobs: List[Dict[str, Any]] = []
        self.companies: List[Dict[str, Any]] = []
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    def refresh(self) -> List[Dict[str, Any]]:
        """Fetch active jobs and apply the exclusion set."""
        server_jobs = self.api.list_jobs(user_id=self.user_id)
        with self._lock:
            self.jobs = merge_active(server_jobs, self.job_exclusions.load(self.user_id))
            return list(self.jobs)

    def delete_job(self, job_id: str) -> Dict[str, Any]:
        """
        Move a job to trash, hiding it before the server answers.

        Raises:
            ApiError: the server or network failed; local state is rolled back
        """
        with self._lock:
            previous_jobs = list(self.jobs)
            was_excluded = self.job_exclusions.contains(self.user_id, job_id)
            self.jobs = [job for job in self.jobs if job.get("id") != job_id]
            self.job_exclusions.add(self.user_id, job_id)

        try:
            result = self.api.soft_delete_job(job_id, self.user_id)
        except ApiError as e:
            with self._lock:
                self.jobs = previous_jobs
                if not was_excluded:
                    self.job_exclusions.discard(self.user_id, job_id)
            self.notify("Failed to delete job", e.message)
            raise

        logger.info(f"Job {job_id} moved to trash (alreadyDeleted={result.get('alreadyDeleted', False)})")
        return result

    def restore_job(self, deleted_post_id: str) -> Dict[str, Any]:
        """
        Restore a trashed job; only a confirmed restore un-hides it locally.
        """
        try:
            result = self.api.restore_deleted_post(deleted_post_id)
        except ApiError as e:
            self.notify("Failed to restore post", e.message)
            raise

        job_id = (result.get("job") or {}).get("id")
        if job_id:
            self.job_exclusions.discard(self.user_id, job_id)
        try:
            self.refresh()
        except ApiError as e:
            # The restore itself went through; the next poll re-syncs the list
            logger.warning(f"Refresh after restoring {deleted_post_id} failed: {e.message}")
        return result

    def deleted_posts(self) -> List[Dict[str, Any]]:
        return self.api.get_deleted_posts(self.user_id)

    # ------------------------------------------------------------------
    # Companies
    # ------------------------------------------------------------------

    def refresh_companies(self) -> List[Dict[str, Any]]:
        server_companies = self.api.list_companies(user_id=self.user_id)
        with self._lock:
            self.companies = merge_active(server_companies, self.company_exclusions.load(self.user_id))
            return list(self.companies)

    def delete_company(self, company_id: str) -> Dict[str, Any]:
        with self._lock:
            previous_companies = list(self.companies)
            was_excluded = self.company_exclusions.contains(self.user_id, company_id)
            self.companies = [company for company in self.companies if company.get("id") != company_id]
            self.company_exclusions.add(self.user_id, company_id)

        try:
            return self.api.soft_delete_company(company_id, self.user_id)
        except ApiError as e:
            with self._lock:
                self.companies = previous_companies
                if not was_excluded:
                    self.company_exclusions.discard(self.user_id, company_id)
            self.notify("Failed to delete company", e.message)
            raise

    def restore_company(self, deleted_company_id: str) -> Dict[str, Any]:
        try:
            result = self.api.restore_deleted_company(deleted_company_id)
        except ApiError as e:
            self.notify("Failed to restore company", e.message)
            raise

        company_id = (result.get("company") or {}).get("id")
        if company_id:
            self.company_exclusions.discard(self.user_id, company_id)
        try:
            self.refresh_companies()
        except ApiError as e:
            logger.warning(f"Refresh after restoring {deleted_company_id} failed: {e.message}")
        return result

    # ------------------------------------------------------------------
    # Background re-sync
    # ------------------------------------------------------------------

    def poll(self, stop_event: threading.Event, interval: float = DEFAULT_POLL_INTERVAL_SECONDS):
        """
        Re-sync jobs every `interval` seconds until `stop_event` is set.

        A failed refresh keeps the last known list and tries again on the
        next tick.
        """
        while not stop_event.wait(interval):
            try:
                self.refresh()
            except ApiError as e:
                logger.warning(f"Background refresh failed for user {self.user_id}: {e.message}")

    def start_polling(self, interval: float = DEFAULT_POLL_INTERVAL_SECONDS) -> threading.Event:
        """Run poll() on a daemon thread; set the returned event to stop it."""
        stop_event = threading.Event()
        thread = threading.Thread(
            target=self.poll,
            args=(stop_event, interval),
            name=f"board-poll-{self.user_id}",
            daemon=True,
        )
        thread.start()
        return stop_event
