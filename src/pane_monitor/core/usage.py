"""
Token usage and cost from provider session logs.

Each supported provider keeps its session logs somewhere different and in
its own format; PROVIDER_LOGS maps the closed set of providers to their
layout. Resolution is on demand (explicit user action) and never raises.
"""

import hashlib
import json
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

from ..utils.logger import debug
from .models import TokenUsage
from .pricing import PricingStrategy

CLAUDE_PROJECTS_DIR = Path(os.path.expanduser("~/.claude/projects"))
GEMINI_TMP_DIR = Path(os.path.expanduser("~/.gemini/tmp"))

# Characters Claude folds to "-" when naming a project's log directory
_CLAUDE_PATH_SEPARATORS = frozenset("/_. ")


class Provider(Enum):
    CLAUDE = "claude"
    GEMINI = "gemini"

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> Optional["Provider"]:
        """Provider for a pane's provider tag, or None if unsupported"""
        if not tag:
            return None
        try:
            return cls(tag.strip().lower())
        except ValueError:
            return None


def _count(value: Any) -> int:
    """Token count from a JSON value; anything not a non-negative int is 0"""
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(0, value)


def encode_claude_path(path: str) -> str:
    """Claude project directory name for a working directory.

    "/Users/me/cua_project" -> "-Users-me-cua-project"
    """
    return "".join("-" if c in _CLAUDE_PATH_SEPARATORS else c for c in path)


def gemini_project_hash(path: str) -> str:
    """Gemini project directory name: sha256 of the project root"""
    return hashlib.sha256(path.encode("utf-8")).hexdigest()


def parse_claude_log(log_file: Path) -> TokenUsage:
    """Sum usage over every line of a Claude JSONL transcript.

    Lines that are not JSON objects are skipped.
    """
    usage = TokenUsage()
    with open(log_file, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                entry = json.loads(line)
            except json.JSONDecodeError:
                continue
            if not isinstance(entry, dict):
                continue

            data = None
            message = entry.get("message")
            if isinstance(message, dict):
                model = message.get("model")
                if isinstance(model, str) and model:
                    usage.model = model
                data = message.get("usage")
            if not isinstance(data, dict):
                data = entry.get("usage")
            if not isinstance(data, dict):
                continue

            usage.input_tokens += _count(data.get("input_tokens"))
            usage.output_tokens += _count(data.get("output_tokens"))
            usage.cache_read_tokens += _count(data.get("cache_read_input_tokens"))
            usage.cache_write_tokens += _count(
                data.get("cache_creation_input_tokens")
            )
    return usage


def parse_gemini_log(log_file: Path) -> TokenUsage:
    """Sum message token counts of a Gemini chat session file"""
    usage = TokenUsage()
    with open(log_file, "r", encoding="utf-8", errors="replace") as f:
        try:
            session = json.load(f)
        except json.JSONDecodeError:
            return usage

    messages = session.get("messages") if isinstance(session, dict) else None
    if not isinstance(messages, list):
        return usage

    for message in messages:
        if not isinstance(message, dict):
            continue
        model = message.get("model")
        if isinstance(model, str) and model:
            usage.model = model
        tokens = message.get("tokens")
        if not isinstance(tokens, dict):
            continue
        # "input" includes "cached"; thinking tokens bill as output
        cached = _count(tokens.get("cached"))
        usage.input_tokens += max(0, _count(tokens.get("input")) - cached)
        usage.output_tokens += _count(tokens.get("output")) + _count(
            tokens.get("thoughts")
        )
        usage.cache_read_tokens += cached
    return usage


@dataclass(frozen=True)
class ProviderLog:
    """Where a provider keeps its session logs and how to read them"""

    default_root: Path
    session_dir: Callable[[Path, str], Path]  # (root, working dir) -> log dir
    pattern: str
    parse: Callable[[Path], TokenUsage]


PROVIDER_LOGS: dict[Provider, ProviderLog] = {
    Provider.CLAUDE: ProviderLog(
        default_root=CLAUDE_PROJECTS_DIR,
        session_dir=lambda root, path: root / encode_claude_path(path),
        pattern="*.jsonl",
        parse=parse_claude_log,
    ),
    Provider.GEMINI: ProviderLog(
        default_root=GEMINI_TMP_DIR,
        session_dir=lambda root, path: root / gemini_project_hash(path) / "chats",
        pattern="*.json",
        parse=parse_gemini_log,
    ),
}


class UsageCostResolver:
    """Resolve token usage and cost for a pane's working directory.

    Args:
        log_roots: Override the log root per provider (tests, custom installs).
        pricing: Cost strategy, flat table by default.
    """

    def __init__(
        self,
        log_roots: Optional[dict[Provider, Path]] = None,
        pricing: PricingStrategy = PricingStrategy.FLAT,
    ):
        self._log_roots = dict(log_roots or {})
        self.pricing = pricing

    def log_root(self, provider: Provider) -> Path:
        return self._log_roots.get(provider, PROVIDER_LOGS[provider].default_root)

    def latest_log(self, provider: Provider, path: str) -> Optional[Path]:
        """Most recently modified session log for `path`, if any"""
        layout = PROVIDER_LOGS[provider]
        log_dir = layout.session_dir(self.log_root(provider), path)
        if not log_dir.is_dir():
            return None

        candidates: list[tuple[float, Path]] = []
        for log_file in log_dir.glob(layout.pattern):
            try:
                if log_file.is_file():
                    candidates.append((log_file.stat().st_mtime, log_file))
            except OSError:
                continue  # Removed while listing
        if not candidates:
            return None
        return max(candidates, key=lambda c: c[0])[1]

    def resolve(self, path: str, provider_tag: Optional[str]) -> TokenUsage:
        """Usage and cost for the newest session log of `path`.

        Returns zero usage for unsupported providers, missing logs and
        unreadable files. Never raises.
        """
        provider = Provider.from_tag(provider_tag)
        if provider is None:
            return TokenUsage()

        try:
            log_file = self.latest_log(provider, path)
            if log_file is None:
                return TokenUsage()
            usage = PROVIDER_LOGS[provider].parse(log_file)
        except Exception as e:  # Intentional catch-all: foreign log files must not break monitoring
            debug(f"[Usage] Could not read {provider.value} log for {path}: {e}")
            return TokenUsage()

        usage.cost_usd = self.pricing.cost(usage)
        return usage
