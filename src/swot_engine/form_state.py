"""
Form state for the SWOT page.

Both profiles live side by side; only the active one is shown and analysed.
The result, error message and upload info belong to a single run and are
dropped whenever the mode changes or a profile is reset.

Uploads and analyses start with a Ticket and report back through it. An
outcome is applied only while its ticket is current: same mode, same
generation (bumped by switch/reset/remove) and the latest ticket of its kind.
Anything else is discarded.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from swot_engine.schemas import MODES, AnalysisResult, empty_profile

logger = logging.getLogger(__name__)

EXTRACTION = "extraction"
ANALYSIS = "analysis"


@dataclass(frozen=True)
class Ticket:
    kind: str
    mode: str
    generation: int
    seq: int


@dataclass
class UploadState:
    filename: Optional[str] = None
    parsing: bool = False


class FormState:
    def __init__(self, mode: str = "individual") -> None:
        self.mode = self._check_mode(mode)
        self.profiles = {m: empty_profile(m) for m in MODES}
        self.result: Optional[AnalysisResult] = None
        self.error: Optional[str] = None
        self.upload = UploadState()
        self.loading = False
        self._generation = 0
        self._seq: Dict[str, int] = {EXTRACTION: 0, ANALYSIS: 0}

    @staticmethod
    def _check_mode(mode: str) -> str:
        if mode not in MODES:
            raise ValueError(f"Unknown mode: {mode!r}")
        return mode

    @property
    def active_profile(self):
        return self.profiles[self.mode]

    def profile(self, mode: str):
        return self.profiles[self._check_mode(mode)]

    @property
    def parsing(self) -> bool:
        return self.upload.parsing

    @property
    def can_analyze(self) -> bool:
        return not (self.loading or self.upload.parsing)

    # ------------------------------------------------------------------
    # Field edits and resets
    # ------------------------------------------------------------------

    def set_field(self, mode: str, field: str, value: str) -> None:
        profile = self.profile(mode)
        if field not in profile.field_names():
            raise KeyError(f"{mode} profile has no field {field!r}")
        setattr(profile, field, value)

    def switch_mode(self, mode: str) -> None:
        self.mode = self._check_mode(mode)
        self._clear_run_state()

    def reset(self, mode: str) -> None:
        self.profiles[self._check_mode(mode)] = empty_profile(mode)
        self._clear_run_state()

    def remove_file(self) -> None:
        """Forget the uploaded file and the text it produced."""
        self.upload = UploadState()
        self.active_profile.content = ""
        self.loading = False
        self._generation += 1

    def report_error(self, message: str) -> None:
        self.error = message

    def _clear_run_state(self) -> None:
        self.result = None
        self.error = None
        self.upload = UploadState()
        self.loading = False
        self._generation += 1

    # ------------------------------------------------------------------
    # Tickets
    # ------------------------------------------------------------------

    def _issue(self, kind: str) -> Ticket:
        self._seq[kind] += 1
        return Ticket(kind=kind, mode=self.mode, generation=self._generation, seq=self._seq[kind])

    def is_current(self, ticket: Ticket) -> bool:
        return (
            ticket.mode == self.mode
            and ticket.generation == self._generation
            and ticket.seq == self._seq[ticket.kind]
        )

    def _accept(self, ticket: Ticket) -> bool:
        if self.is_current(ticket):
            return True
        logger.debug(f"Discarding stale {ticket.kind} outcome (mode={ticket.mode}, generation={ticket.generation})")
        return False

    def begin_extraction(self, filename: str) -> Ticket:
        self.error = None
        self.upload = UploadState(filename=filename, parsing=True)
        return self._issue(EXTRACTION)

    def finish_extraction(self, ticket: Ticket, text: str) -> bool:
        if not self._accept(ticket):
            return False
        self.active_profile.content = text
        self.upload.parsing = False
        return True

    def fail_extraction(self, ticket: Ticket, message: str) -> bool:
        if not self._accept(ticket):
            return False
        self.error = message
        self.upload.parsing = False
        return True

    def begin_analysis(self) -> Ticket:
        self.error = None
        self.loading = True
        return self._issue(ANALYSIS)

    def finish_analysis(self, ticket: Ticket, result: AnalysisResult) -> bool:
        if not self._accept(ticket):
            return False
        self.result = result
        self.loading = False
        return True

    def fail_analysis(self, ticket: Ticket, message: str) -> bool:
        if not self._accept(ticket):
            return False
        self.error = message
        self.loading = False
        return True
