"""
Scheduler Service
Weekly budget alerts and spending digests, run by APScheduler.
"""
import logging
from datetime import datetime
from typing import Callable, List, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy.orm import Session

from budget_tracker.core.config import settings
from budget_tracker.db import crud
from budget_tracker.db.session import SessionLocal
from budget_tracker.utils.analyzer import (
    BudgetAnalyzer,
    BudgetCheckResult,
    WeeklyDigestData,
    month_bounds,
    previous_week_bounds,
)

logger = logging.getLogger(__name__)

WEEKLY_JOB_ID = "weekly_budget_tasks"
# expense dates and period windows are naive UTC, so the cron fires on the UTC clock
SCHEDULER_TIMEZONE = "UTC"


class BudgetScheduler:
    """
    Process-wide weekly job: checks every user's monthly spend against the
    budget, then writes a digest of the previous week's spending.

    Use ``BudgetScheduler.get_instance()``; the instance is created on first use.
    """

    _instance: Optional["BudgetScheduler"] = None

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        analyzer: Optional[BudgetAnalyzer] = None,
        scheduler: Optional[BackgroundScheduler] = None,
    ) -> None:
        self._session_factory = session_factory
        self.analyzer = analyzer or BudgetAnalyzer(settings.MONTHLY_BUDGET, settings.BUDGET_WARNING_PERCENT)
        self.scheduler = scheduler or BackgroundScheduler(timezone=SCHEDULER_TIMEZONE)
        self._initialize_scheduler()

    @classmethod
    def get_instance(cls) -> "BudgetScheduler":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def current(cls) -> Optional["BudgetScheduler"]:
        """The singleton if it has been created, without creating it."""
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Shut down and forget the singleton."""
        if cls._instance is not None:
            cls._instance.shutdown()
            cls._instance = None

    def _initialize_scheduler(self):
        self.scheduler.add_job(
            self.run_weekly_tasks,
            trigger=CronTrigger(
                day_of_week=settings.SCHEDULER_DAY_OF_WEEK,
                hour=settings.SCHEDULER_HOUR,
                minute=settings.SCHEDULER_MINUTE,
                timezone=SCHEDULER_TIMEZONE,
            ),
            id=WEEKLY_JOB_ID,
            name="Weekly budget check and digest generation",
            replace_existing=True,
        )
        logger.info(
            f"Budget scheduler initialized - running weekly on {settings.SCHEDULER_DAY_OF_WEEK} "
            f"at {settings.SCHEDULER_HOUR:02d}:{settings.SCHEDULER_MINUTE:02d} {SCHEDULER_TIMEZONE}"
        )

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def start(self):
        if self.scheduler.running:
            logger.warning("Scheduler is already running")
            return
        self.scheduler.start()
        logger.info("Scheduler started")

    def shutdown(self):
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped")

    def status(self) -> dict:
        jobs = []
        for job in self.scheduler.get_jobs():
            # pending jobs have no next_run_time until the scheduler starts
            next_run = getattr(job, "next_run_time", None)
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run": next_run.isoformat() if next_run else None,
            })
        return {"running": self.scheduler.running, "jobs": jobs}

    def run_weekly_tasks(self, now: Optional[datetime] = None) -> bool:
        """Alert check, then digest generation. Failures are logged, never raised."""
        now = now or datetime.utcnow()
        logger.info("Running weekly budget check and digest generation...")
        try:
            self.check_budget_alerts(now)
            self.generate_weekly_digests(now)
            logger.info("Weekly tasks completed successfully")
            return True
        except Exception:
            logger.exception("Error running weekly tasks")
            return False

    def check_budget_alerts(self, now: Optional[datetime] = None) -> List[BudgetCheckResult]:
        """Create an alert for every user at or above the warning level. Returns their results."""
        now = now or datetime.utcnow()
        alerted = []
        with self._session_factory() as db:
            for user in crud.list_users(db):
                if not user.email:
                    continue

                result = self._calculate_user_budget(db, user, now)
                record = self.analyzer.alert_record(result)
                if record is None:
                    continue

                crud.create_budget_alert(db, user.id, record)
                logger.info(f"Created budget alert for user {result.user_email}: {record['message']}")
                alerted.append(result)
        return alerted

    def generate_weekly_digests(self, now: Optional[datetime] = None) -> List[WeeklyDigestData]:
        """Persist a digest of last week's spending for every user who spent anything."""
        now = now or datetime.utcnow()
        week_start, week_end = previous_week_bounds(now)
        digests = []
        with self._session_factory() as db:
            for user in crud.list_users(db):
                if not user.email:
                    continue

                expenses = crud.get_expenses_for_user(db, user.id, week_start, week_end)
                digest = self.analyzer.weekly_digest(user.id, expenses, week_start, week_end)
                if digest is None:
                    continue

                crud.create_weekly_digest(db, user.id, {
                    "week_start": digest.week_start,
                    "week_end": digest.week_end,
                    "total_spent": digest.total_spent,
                    "category_breakdown": digest.category_breakdown,
                    "message": digest.message,
                })
                logger.info(f"Created weekly digest for user {user.id}: {digest.message}")
                digests.append(digest)
        return digests

    def _calculate_user_budget(self, db: Session, user, now: datetime) -> BudgetCheckResult:
        month_start, month_end = month_bounds(now)
        expenses = crud.get_expenses_for_user(db, user.id, month_start, month_end)
        return self.analyzer.evaluate(user, expenses)

    def trigger_weekly_tasks(self) -> bool:
        logger.info("Manually triggering weekly tasks...")
        return self.run_weekly_tasks()

    def check_budget_for_user(self, user_id: str, now: Optional[datetime] = None) -> Optional[BudgetCheckResult]:
        now = now or datetime.utcnow()
        with self._session_factory() as db:
            user = crud.get_user_by_id(db, user_id)
            if not user or not user.email:
                logger.error(f"Error checking budget for user {user_id}: user not found or no email")
                return None
            return self._calculate_user_budget(db, user, now)


def start_scheduler():
    """Create the singleton if needed and start its background thread."""
    BudgetScheduler.get_instance().start()


def stop_scheduler():
    BudgetScheduler.reset_instance()


def get_scheduler_status() -> dict:
    budget_scheduler = BudgetScheduler.current()
    if budget_scheduler is None:
        return {"running": False, "jobs": []}
    return budget_scheduler.status()
