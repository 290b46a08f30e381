import logging
import threading
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)

PAGES = ("home", "calculator", "dashboard", "about")

STATUS_IDLE = "idle"
STATUS_GENERATING = "generating"
STATUS_READY = "ready"


@dataclass(frozen=True)
class RecommendationTicket:
    seq: int
    metrics: object


@dataclass
class ReportSnapshot:
    page: str
    metrics: Optional[object]
    recommendations: List[object]
    status: str
    request_seq: int


@dataclass
class ReportState:
    """
    Single-tenant application state: the selected view and the last
    submitted input, plus the recommendations that belong to that input.

    Recommendation requests are ticketed with the input they were made
    for. settle() keeps a result only while that input is still the one
    being reported on, so a slow response for an older input never
    overwrites a newer one. Results for the same input are all valid;
    the one from the most recent request wins.
    """
    page: str = "home"
    metrics: Optional[object] = None
    recommendations: List[object] = field(default_factory=list)
    status: str = STATUS_IDLE
    _seq: int = 0
    _target: Optional[object] = None
    _applied_seq: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def navigate(self, page: str) -> None:
        if page not in PAGES:
            raise ValueError(f"Unknown page: {page}")
        with self._lock:
            self.page = page

    def submit(self, metrics) -> None:
        """Store new input; results of the previous input are dropped."""
        with self._lock:
            self.metrics = metrics
            self._target = metrics
            self.recommendations = []
            self._applied_seq = 0
            self.status = STATUS_IDLE
            self.page = "dashboard"

    def cached(self, metrics) -> Optional[List[object]]:
        """Recommendations already settled for these metrics, if any."""
        with self._lock:
            if self.status == STATUS_READY and self._target == metrics:
                return list(self.recommendations)
            return None

    def begin(self, metrics) -> RecommendationTicket:
        with self._lock:
            self._seq += 1
            if self._target != metrics:
                self._target = metrics
                self.recommendations = []
                self._applied_seq = 0
            if self.status != STATUS_READY or not self.recommendations:
                self.status = STATUS_GENERATING
            logger.info("Recommendation request #%d started", self._seq)
            return RecommendationTicket(seq=self._seq, metrics=metrics)

    def settle(self, ticket: RecommendationTicket, recommendations) -> bool:
        """Apply a result; False when the input changed since the request began."""
        with self._lock:
            if ticket.metrics != self._target:
                logger.info("Discarding stale recommendations #%d (input changed)", ticket.seq)
                return False
            if ticket.seq > self._applied_seq:
                self.recommendations = list(recommendations)
                self._applied_seq = ticket.seq
            self.status = STATUS_READY
            return True

    def snapshot(self) -> ReportSnapshot:
        with self._lock:
            return ReportSnapshot(
                page=self.page,
                metrics=self.metrics,
                recommendations=list(self.recommendations),
                status=self.status,
                request_seq=self._seq,
            )
