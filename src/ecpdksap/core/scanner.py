"""
Scanner: recover the outputs addressed to a recipient from a list of
published ephemeral points.

Per candidate, independently and in this order:

    1. decode R                         MalformedEncoding / PointNotOnCurve
    2. T = v·R                          shared point, reused below
    3. view tag filter (if configured)  mismatch -> skipped, not an error
    4. variant.recover(...)             -> ScanMatch

With a b-byte tag a batch of N candidates costs N cheap filters plus about
N / 256**b full recoveries. Candidates share no state, so they can run on a
thread pool; matches are always reported in input order.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from ecpdksap.core.config import ScanConfig
from ecpdksap.core.keys import RecipientKeys
from ecpdksap.core.models import ScanCandidate, StealthIdentifier
from ecpdksap.crypto.curves import DEFAULT_CONTEXT, CurveContext
from ecpdksap.crypto.encoding import decode_g1
from ecpdksap.crypto.view_tag import ViewTagScheme, parse_view_tag_scheme
from ecpdksap.errors import StealthError
from ecpdksap.protocol import ProtocolVariant, get_variant

logger = logging.getLogger("ecpdksap.scanner")


@dataclass(frozen=True)
class ScanMatch:
    """A candidate that survived the filter, with its recovered identifier."""
    index: int
    ephemeral: str
    identifier: StealthIdentifier


@dataclass(frozen=True)
class CandidateError:
    """A candidate that could not be evaluated (recorded under on_error="skip")."""
    index: int
    kind: str
    message: str


@dataclass
class ScanStats:
    """Batch counters; timings are informational and excluded from equality."""
    candidates: int = 0
    scanned: int = 0
    filtered_out: int = 0
    recoveries: int = 0
    failed: int = 0
    filter_seconds: float = field(default=0.0, compare=False)
    recovery_seconds: float = field(default=0.0, compare=False)

    @property
    def avg_filter_ms(self) -> float:
        return 1000 * self.filter_seconds / self.scanned if self.scanned else 0.0

    @property
    def avg_recovery_ms(self) -> float:
        return 1000 * self.recovery_seconds / self.recoveries if self.recoveries else 0.0


@dataclass
class ScanResult:
    """
    Outcome of one scan.

    Attributes:
        matches: One entry per candidate that passed the filter, in input order.
        errors: Candidates skipped because of an input error.
        stats: Counters and timings for the batch.
        truncated: True if the time budget stopped dispatch before the end.
    """
    matches: list[ScanMatch] = field(default_factory=list)
    errors: list[CandidateError] = field(default_factory=list)
    stats: ScanStats = field(default_factory=ScanStats)
    truncated: bool = False

    @property
    def identifiers(self) -> list[StealthIdentifier]:
        return [m.identifier for m in self.matches]

    def __len__(self) -> int:
        return len(self.matches)


@dataclass(frozen=True)
class CandidateOutcome:
    """What happened to one candidate: matched, filtered out, or failed."""
    index: int
    match: ScanMatch | None = None
    error: StealthError | None = None
    filtered: bool = False
    filter_seconds: float = 0.0
    recovery_seconds: float = 0.0


def _as_candidate(candidate: ScanCandidate | str) -> ScanCandidate:
    if isinstance(candidate, ScanCandidate):
        return candidate
    return ScanCandidate(ephemeral=candidate)


class Scanner:
    """
    Recipient-side scanner bound to one set of keys, variant and tag scheme.

    Usage:
        keys = RecipientKeys.generate(Group.SECP256K1)
        scanner = Scanner(keys, "v2", "v0-1byte")
        result = scanner.scan(candidates)
        for match in result.matches:
            print(match.identifier.address, match.identifier.private_key)
    """

    def __init__(
        self,
        keys: RecipientKeys,
        variant: str | ProtocolVariant,
        view_tag: str | ViewTagScheme | None = None,
        config: ScanConfig | None = None,
        ctx: CurveContext = DEFAULT_CONTEXT,
    ) -> None:
        self._keys = keys
        self._variant = get_variant(variant)
        self._scheme = parse_view_tag_scheme(view_tag)
        self._config = config or ScanConfig()
        self._ctx = ctx
        self._variant.check_spend_group(keys.spend.group)

    @property
    def variant(self) -> ProtocolVariant:
        return self._variant

    @property
    def view_tag_scheme(self) -> ViewTagScheme | None:
        return self._scheme

    @property
    def config(self) -> ScanConfig:
        return self._config

    # ------------------------------------------------------------------
    # Per-candidate work
    # ------------------------------------------------------------------

    def scan_candidate(self, index: int, candidate: ScanCandidate | str) -> CandidateOutcome:
        """
        Evaluate one candidate. Pure: touches no scanner state.

        Input errors are returned in the outcome rather than raised so the
        batch policy can decide what to do with them.
        """
        candidate = _as_candidate(candidate)
        started = time.perf_counter()
        try:
            R = decode_g1(candidate.ephemeral, f"candidate {index} ephemeral point")
            shared = self._variant.shared_point_recipient(self._ctx, self._keys, R)
            if self._scheme is not None and candidate.view_tag is not None:
                published = self._scheme.decode(candidate.view_tag)
                if not self._scheme.matches(shared, published):
                    return CandidateOutcome(
                        index=index,
                        filtered=True,
                        filter_seconds=time.perf_counter() - started,
                    )
        except StealthError as e:
            return CandidateOutcome(index=index, error=e, filter_seconds=time.perf_counter() - started)

        filtered_at = time.perf_counter()
        identifier = self._variant.recover(self._ctx, self._keys, R, shared)
        return CandidateOutcome(
            index=index,
            match=ScanMatch(index=index, ephemeral=candidate.ephemeral, identifier=identifier),
            filter_seconds=filtered_at - started,
            recovery_seconds=time.perf_counter() - filtered_at,
        )

    def _run(self, index: int, candidate: ScanCandidate | str, deadline: float | None) -> CandidateOutcome | None:
        if deadline is not None and time.monotonic() >= deadline:
            return None
        return self.scan_candidate(index, candidate)

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------

    def scan(self, candidates: Sequence[ScanCandidate | str]) -> ScanResult:
        """
        Scan a batch of candidates.

        Returns:
            ScanResult with matches in input order.

        Raises:
            StealthError: Only with on_error="abort", for the first bad candidate.
        """
        items = list(candidates)
        result = ScanResult(stats=ScanStats(candidates=len(items)))
        deadline = None
        if self._config.time_budget is not None:
            deadline = time.monotonic() + self._config.time_budget

        if self._config.max_workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=self._config.max_workers) as pool:
                outcomes = pool.map(
                    lambda pair: self._run(pair[0], pair[1], deadline), enumerate(items)
                )
                try:
                    self._collect(result, outcomes)
                except StealthError:
                    pool.shutdown(wait=False, cancel_futures=True)
                    raise
        else:
            self._collect(result, (self._run(i, c, deadline) for i, c in enumerate(items)))

        self._log_summary(result)
        return result

    def _collect(self, result: ScanResult, outcomes: Iterable[CandidateOutcome | None]) -> None:
        stats = result.stats
        for outcome in outcomes:
            if outcome is None:
                result.truncated = True
                continue
            stats.scanned += 1
            stats.filter_seconds += outcome.filter_seconds
            stats.recovery_seconds += outcome.recovery_seconds

            if outcome.error is not None:
                if self._config.abort_on_error:
                    raise outcome.error
                stats.failed += 1
                logger.warning(f"Skipping candidate {outcome.index}: {outcome.error}")
                result.errors.append(
                    CandidateError(
                        index=outcome.index,
                        kind=outcome.error.kind,
                        message=str(outcome.error),
                    )
                )
            elif outcome.filtered:
                stats.filtered_out += 1
            elif outcome.match is not None:
                stats.recoveries += 1
                result.matches.append(outcome.match)
                logger.debug(f"Candidate {outcome.index} passed the filter ({self._variant.name})")

    def _log_summary(self, result: ScanResult) -> None:
        stats = result.stats
        scheme = self._scheme.name if self._scheme else "none"
        logger.info(
            f"Scanned {stats.scanned}/{stats.candidates} candidates "
            f"(variant={self._variant.name}, view_tag={scheme}): "
            f"{stats.recoveries} recovered, {stats.filtered_out} filtered, {stats.failed} failed"
            f"{' [truncated]' if result.truncated else ''}; "
            f"avg filter {stats.avg_filter_ms:.3f} ms, avg recovery {stats.avg_recovery_ms:.3f} ms"
        )


def scan(
    keys: RecipientKeys,
    variant: str | ProtocolVariant,
    view_tag: str | ViewTagScheme | None,
    candidates: Sequence[ScanCandidate | str],
    config: ScanConfig | None = None,
    ctx: CurveContext = DEFAULT_CONTEXT,
) -> ScanResult:
    """One-shot helper: Scanner(keys, variant, view_tag, config, ctx).scan(candidates)."""
    return Scanner(keys, variant, view_tag, config=config, ctx=ctx).scan(candidates)
