"""
Data models for Pane Monitor
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Status(Enum):
    WORKING = "working"
    WAITING_FOR_INPUT = "waiting"
    PERMISSION_REQUIRED = "permission"
    NOT_DETECTED = "not_detected"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def icon(self) -> str:
        return _STATUS_ICONS[self]

    @classmethod
    def from_token(cls, token: Optional[str]) -> "Status":
        """Parse a hook-published status token.

        Only "working", "waiting" and "permission" are recognized; anything
        else (including None) is NOT_DETECTED.
        """
        if token is None:
            return cls.NOT_DETECTED
        try:
            return cls(token.strip())
        except ValueError:
            return cls.NOT_DETECTED


_STATUS_LABELS = {
    Status.WORKING: "Working",
    Status.WAITING_FOR_INPUT: "Waiting for input",
    Status.PERMISSION_REQUIRED: "Permission required",
    Status.NOT_DETECTED: "Not detected",
}

_STATUS_ICONS = {
    Status.WORKING: "◐",
    Status.WAITING_FOR_INPUT: ">_",
    Status.PERMISSION_REQUIRED: "⚠",
    Status.NOT_DETECTED: "--",
}


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


_ASCII_DIGITS = frozenset("0123456789")


def _is_version_string(command: str) -> bool:
    """Version-like command such as 2.1.7: digits and dots, leading digit"""
    return (
        bool(command)
        and command[0] in _ASCII_DIGITS
        and all(c in _ASCII_DIGITS or c == "." for c in command)
    )


def is_agent_running(provider: str, command: Optional[str]) -> bool:
    """Whether the pane's foreground command is the provider's agent.

    Claude shows up as its version ("2.1.7"), "claude" or "node"; Gemini as
    "gemini" or "node"; Codex as "codex", "codex-<arch>..." or "node".
    """
    provider = provider.strip().lower()
    command = (command or "").strip()
    if provider == "claude":
        return _is_version_string(command) or command in ("claude", "node")
    if provider == "gemini":
        return command in ("gemini", "node")
    if provider == "codex":
        return command.startswith("codex") or command == "node"
    return False


@dataclass
class PaneObservation:
    """One poll's reported state for a pane"""

    id: str
    session_name: str
    window_index: int
    pane_index: int
    current_path: str
    provider: Optional[str] = None  # claude, gemini, codex...
    status: Status = Status.NOT_DETECTED
    task: Optional[str] = None

    @classmethod
    def from_pane_options(
        cls,
        id: str,
        session_name: str,
        window_index: int,
        pane_index: int,
        current_path: str,
        provider: Optional[str] = None,
        status_token: Optional[str] = None,
        task: Optional[str] = None,
        current_command: Optional[str] = None,
    ) -> "PaneObservation":
        """Build an observation from raw hook-published pane options.

        Hook options outlive the agent that set them, so the status is only
        trusted when a provider is set and the pane's foreground command is
        that provider's agent. Otherwise the pane is NOT_DETECTED.
        """
        provider = _blank_to_none(provider)
        if provider is None or not is_agent_running(provider, current_command):
            status = Status.NOT_DETECTED
            task = None
        else:
            status = Status.from_token(status_token)
            task = _blank_to_none(task)
        return cls(
            id=id,
            session_name=session_name,
            window_index=window_index,
            pane_index=pane_index,
            current_path=current_path,
            provider=provider,
            status=status,
            task=task,
        )

    @property
    def display_name(self) -> str:
        return f"{self.session_name}:{self.window_index}.{self.pane_index}"

    @property
    def folder_name(self) -> str:
        """Last component of the working directory"""
        stripped = self.current_path.rstrip("/")
        if not stripped:
            return self.current_path
        return stripped.rsplit("/", 1)[-1]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "session_name": self.session_name,
            "window_index": self.window_index,
            "pane_index": self.pane_index,
            "current_path": self.current_path,
            "provider": self.provider,
            "status": self.status.value,
            "task": self.task,
        }


@dataclass
class TokenUsage:
    """Token counts and cost read from a provider session log"""

    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_tokens: int = 0
    cache_write_tokens: int = 0
    model: Optional[str] = None  # Last model seen in the log
    cost_usd: float = 0.0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    @property
    def is_empty(self) -> bool:
        return (
            self.input_tokens == 0
            and self.output_tokens == 0
            and self.cache_read_tokens == 0
            and self.cache_write_tokens == 0
        )

    def to_dict(self) -> dict:
        return {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "cache_read_tokens": self.cache_read_tokens,
            "cache_write_tokens": self.cache_write_tokens,
            "model": self.model,
            "cost_usd": self.cost_usd,
        }


@dataclass
class PaneStats:
    """Accumulated time per status bucket (seconds)"""

    working_secs: int = 0
    waiting_secs: int = 0
    permission_secs: int = 0
    state_changes: int = 0

    def add(self, status: Status, secs: int) -> None:
        """Credit `secs` to the bucket of `status`. NOT_DETECTED is never accounted."""
        if secs <= 0:
            return
        if status == Status.WORKING:
            self.working_secs += secs
        elif status == Status.WAITING_FOR_INPUT:
            self.waiting_secs += secs
        elif status == Status.PERMISSION_REQUIRED:
            self.permission_secs += secs

    def to_dict(self) -> dict:
        return {
            "working_secs": self.working_secs,
            "waiting_secs": self.waiting_secs,
            "permission_secs": self.permission_secs,
            "state_changes": self.state_changes,
        }


@dataclass
class PaneRecord:
    """Long-lived tracked state of a pane"""

    observation: PaneObservation
    status: Status
    status_changed_at: float  # Monotonic seconds, process-local
    previous_status: Optional[Status] = None
    stats: PaneStats = field(default_factory=PaneStats)
    usage: Optional[TokenUsage] = None  # Fetched on demand

    @property
    def id(self) -> str:
        return self.observation.id

    @property
    def session_name(self) -> str:
        return self.observation.session_name

    @property
    def window_index(self) -> int:
        return self.observation.window_index

    @property
    def pane_index(self) -> int:
        return self.observation.pane_index

    @property
    def current_path(self) -> str:
        return self.observation.current_path

    @property
    def provider(self) -> Optional[str]:
        return self.observation.provider

    @property
    def task(self) -> Optional[str]:
        return self.observation.task

    def status_duration(self, now: float) -> int:
        """Whole seconds spent in the current status"""
        return max(0, int(now - self.status_changed_at))

    def effective_durations(self, now: float) -> tuple[int, int, int]:
        """(working, waiting, permission) including the open-ended current span"""
        working = self.stats.working_secs
        waiting = self.stats.waiting_secs
        permission = self.stats.permission_secs
        current = self.status_duration(now)
        if self.status == Status.WORKING:
            working += current
        elif self.status == Status.WAITING_FOR_INPUT:
            waiting += current
        elif self.status == Status.PERMISSION_REQUIRED:
            permission += current
        return working, waiting, permission

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "observation": self.observation.to_dict(),
            "status": self.status.value,
            "previous_status": (
                self.previous_status.value if self.previous_status else None
            ),
            "stats": self.stats.to_dict(),
        }
        if self.usage:
            result["usage"] = self.usage.to_dict()
        return result


@dataclass
class TransitionEvent:
    """A pane went from busy to needing attention"""

    pane_id: str
    pane_name: str  # session:window.pane
    folder_name: str
    session_name: str
    window_index: int
    pane_index: int
    is_permission: bool

    @property
    def title(self) -> str:
        if self.is_permission:
            return f"Permission: {self.folder_name}"
        return f"Ready: {self.folder_name}"

    @property
    def message(self) -> str:
        if self.is_permission:
            return f"{self.pane_name} needs approval"
        return f"{self.pane_name} is waiting for input"


@dataclass
class AggregatedStats:
    """Point-in-time totals over a view of panes"""

    pane_count: int = 0
    total_working_secs: int = 0
    total_waiting_secs: int = 0
    total_permission_secs: int = 0
    total_state_changes: int = 0

    @property
    def total_tracked_secs(self) -> int:
        return (
            self.total_working_secs
            + self.total_waiting_secs
            + self.total_permission_secs
        )

    @property
    def efficiency(self) -> float:
        """Share of tracked time spent working (0.0 when nothing is tracked)"""
        total = self.total_tracked_secs
        if total == 0:
            return 0.0
        return self.total_working_secs / total

    @property
    def efficiency_percent(self) -> float:
        return self.efficiency * 100.0

    def to_dict(self) -> dict:
        return {
            "pane_count": self.pane_count,
            "total_working_secs": self.total_working_secs,
            "total_waiting_secs": self.total_waiting_secs,
            "total_permission_secs": self.total_permission_secs,
            "total_state_changes": self.total_state_changes,
            "efficiency_percent": self.efficiency_percent,
        }


@dataclass
class StatusSummary:
    """Status counts for the header line"""

    total: int = 0
    working: int = 0
    waiting: int = 0
    permission: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "working": self.working,
            "waiting": self.waiting,
            "permission": self.permission,
        }
