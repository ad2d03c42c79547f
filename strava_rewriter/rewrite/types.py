"""Types shared by the rewrite driver, the CLI and settings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from strava_rewriter.integrations.strava.schemas import Athlete


class PageErrorPolicy(StrEnum):
    """What to do when fetching one page of activities fails.

    STOP keeps what was already collected and ends pagination.
    ABORT re-raises and fails the whole run.
    """

    STOP = "stop"
    ABORT = "abort"


@dataclass(frozen=True)
class RewriteSummary:
    athlete: Athlete
    fetched: int
    renamed: int
    dry_run: bool = False
