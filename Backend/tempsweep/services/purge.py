"""
purge.py
~~~~~~~~
One complete purge run: compute the cutoff, walk the temp directory,
delete every aged-out file and report how many went.
"""
import logging
import os
import stat
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Protocol, Tuple

from tempsweep.services.age_filter import AgeFilter

logger = logging.getLogger(__name__)

# ─── Errors ──────────────────────────────────────────────────────────────────

class PurgeError(Exception):
    """Base class for purge failures."""

class TraversalError(PurgeError):
    """The root directory could not be listed at all."""

class PurgeRunFailed(PurgeError):
    """Raised by the scheduler task when a run ends in the failed state."""

# ─── Data Models ─────────────────────────────────────────────────────────────

class RunStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"

@dataclass
class PurgeConfig:
    root_dir: Path

    def __post_init__(self):
        self.root_dir = Path(self.root_dir)

def _iso(ts: Optional[float]) -> Optional[str]:
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()

@dataclass
class RunReport:
    status: RunStatus
    message: str
    root_dir: str
    cutoff: float
    started_at: float
    finished_at: float
    deleted_count: Optional[int] = None
    failed_paths: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status == RunStatus.SUCCEEDED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "root_dir": self.root_dir,
            "deleted_count": self.deleted_count,
            "failed_paths": list(self.failed_paths),
            "cutoff": _iso(self.cutoff),
            "started_at": _iso(self.started_at),
            "finished_at": _iso(self.finished_at),
        }

class ReportSink(Protocol):
    """Where the host wants the final status of a run."""

    def succeeded(self, message: str) -> None: ...

    def failed(self, message: str) -> None: ...

class LoggingReportSink:
    def succeeded(self, message: str) -> None:
        logger.info(f"Purge succeeded: {message}")

    def failed(self, message: str) -> None:
        logger.error(f"Purge failed: {message}")

# ─── Walk ────────────────────────────────────────────────────────────────────

def check_root(root: Path) -> None:
    """Raise TraversalError unless `root` is a directory we can list."""
    try:
        with os.scandir(root):
            pass
    except OSError as e:
        reason = e.strerror or str(e)
        raise TraversalError(f"Unable to read temporary directory {root}: {reason}") from e

def _log_walk_error(error: OSError) -> None:
    logger.warning(f"Skipping unreadable directory {error.filename}: {error.strerror or error}")

def iter_candidate_files(root: Path) -> Iterator[Tuple[Path, float]]:
    """
    Yield (path, last_modified) for every regular file under `root`.

    Every subdirectory is descended into whatever its own age. Symlinks are
    neither followed nor yielded, and sockets, FIFOs and devices are skipped.
    """
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        for name in filenames:
            path = Path(dirpath, name)
            try:
                st = path.lstat()
            except OSError:
                # Removed between listing and stat
                continue
            if stat.S_ISREG(st.st_mode):
                yield path, st.st_mtime

# ─── Executor ────────────────────────────────────────────────────────────────

class PurgeExecutor:
    """
    Deletes files under the configured root that were last modified at
    least 24 hours before the run started.

    A failed deletion is logged, remembered in the report and skipped; it
    never stops the run. Only a root that cannot be listed fails the run.
    """

    def __init__(self, config: PurgeConfig, clock: Callable[[], float] = time.time):
        self.config = config
        self._clock = clock

    @property
    def root_dir(self) -> Path:
        return self.config.root_dir

    def run(self, context: Optional[ReportSink] = None) -> RunReport:
        sink = context if context is not None else LoggingReportSink()
        started_at = self._clock()
        age_filter = AgeFilter.at(started_at)
        root = self.config.root_dir

        logger.info(f"Deleting old temp files from {root}.")

        try:
            check_root(root)
        except TraversalError as e:
            logger.error(str(e))
            report = RunReport(
                status=RunStatus.FAILED,
                message=str(e),
                root_dir=str(root),
                cutoff=age_filter.cutoff,
                started_at=started_at,
                finished_at=self._clock(),
            )
            sink.failed(report.message)
            return report

        deleted = 0
        failed_paths: List[str] = []
        for path, last_modified in iter_candidate_files(root):
            if not age_filter.accepts(last_modified):
                continue
            logger.debug(f"Deleting file {path}.")
            try:
                path.unlink()
                deleted += 1
            except OSError as e:
                logger.warning(f"Failed to delete {path}: {e.strerror or e}")
                failed_paths.append(str(path))

        message = f"Deleted {deleted} files."
        if failed_paths:
            logger.warning(f"Cleanup: {len(failed_paths)} eligible files under {root} could not be deleted.")
        logger.info(f"Cleanup: {message} ({root})")

        report = RunReport(
            status=RunStatus.SUCCEEDED,
            message=message,
            root_dir=str(root),
            cutoff=age_filter.cutoff,
            started_at=started_at,
            finished_at=self._clock(),
            deleted_count=deleted,
            failed_paths=failed_paths,
        )
        sink.succeeded(message)
        return report

# ─── Factory ─────────────────────────────────────────────────────────────────

def create_executor(settings_obj, clock: Callable[[], float] = time.time) -> PurgeExecutor:
    """
    Build the executor once at startup from settings.
    The root directory is fixed from then on.
    """
    config = PurgeConfig(root_dir=Path(settings_obj.TEMP_DIR).expanduser().absolute())
    return PurgeExecutor(config, clock=clock)
