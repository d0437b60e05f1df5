"""Models for collection cycle bookkeeping."""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional
from datetime import datetime, timezone
from enum import Enum
import uuid


class CollectionStatus(Enum):
    """Status of collection runs."""
    RUNNING = "running"
    COMPLETED = "completed"
    PARTIAL = "partial"


@dataclass
class CollectionRun:
    """Tracking information for one collection cycle."""
    id: str = ""
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    end_time: Optional[datetime] = None
    status: CollectionStatus = CollectionStatus.RUNNING
    tasks_launched: int = 0
    records_collected: int = 0
    errors_count: int = 0
    error_details: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self):
        """Generate ID if not provided."""
        if not self.id:
            self.id = str(uuid.uuid4())

    def record_error(self, error: Exception, **context: Any) -> None:
        """Register a failed fetch task."""
        self.errors_count += 1
        self.error_details.append({
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'error': str(error),
            **context
        })

    def mark_finished(self) -> None:
        """Mark the run as finished; partial when any task failed."""
        self.end_time = datetime.now(timezone.utc)
        if self.errors_count:
            self.status = CollectionStatus.PARTIAL
        else:
            self.status = CollectionStatus.COMPLETED

    @property
    def duration_seconds(self) -> Optional[float]:
        """Duration of the run in seconds."""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None
