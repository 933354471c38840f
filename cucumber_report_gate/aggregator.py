"""Concurrent processing of report files into one aggregate."""

import asyncio
import logging
from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from cucumber_report_gate import parser
from cucumber_report_gate.config import GateConfig
from cucumber_report_gate.errors import AggregationError, DiscoveryError, ReportError
from cucumber_report_gate.models.result import Results

log = logging.getLogger(__name__)

MAX_WORKERS = 5


@dataclass(frozen=True, kw_only=True)
class FileFailure:
    """A report file that could not be processed."""

    path: Path
    error: ReportError


@dataclass(frozen=True, kw_only=True)
class AggregateOutcome:
    """Folded results together with the files that failed to process."""

    results: Results
    processed_files: Sequence[Path] = field(default_factory=list)
    failures: Sequence[FileFailure] = field(default_factory=list)


@dataclass(frozen=True, kw_only=True)
class ReportAggregator:
    """Processes report files concurrently and folds their statistics."""

    config: GateConfig
    max_workers: int = MAX_WORKERS

    async def aggregate(self, files: Collection[Path]) -> AggregateOutcome:
        """Process every file and fold the per-file results.

        Files are processed on worker threads with at most ``max_workers``
        in flight. Read and parse errors are collected as failures and do
        not stop sibling files. Results are folded in sorted path order, so
        the aggregate does not depend on which worker finishes first.

        Args:
            files: Report files to process

        Returns:
            Aggregate results and per-file failures

        Raises:
            DiscoveryError: If no files are given
            AggregationError: If every file failed

        """
        if not files:
            raise DiscoveryError(
                "no Cucumber JSON report files found. Check the report file pattern"
            )

        ordered = sorted(files)
        semaphore = asyncio.Semaphore(self.max_workers)

        log.info(
            "Processing %d report file(s) with up to %d workers...",
            len(ordered),
            self.max_workers,
        )
        tasks = [self._process_file(path, semaphore) for path in ordered]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        return self._fold(ordered, outcomes)

    async def _process_file(
        self, path: Path, semaphore: asyncio.Semaphore
    ) -> Results:
        async with semaphore:
            return await asyncio.to_thread(
                parser.process_report_file, path, self.config
            )

    def _fold(
        self,
        paths: Sequence[Path],
        outcomes: Sequence[Results | BaseException],
    ) -> AggregateOutcome:
        """Fold worker outcomes, separating results from per-file failures."""
        aggregate = Results()
        processed: list[Path] = []
        failures: list[FileFailure] = []

        for path, outcome in zip(paths, outcomes, strict=True):
            if isinstance(outcome, Results):
                aggregate.add(outcome)
                processed.append(path)
            elif isinstance(outcome, ReportError):
                log.warning("Failed to process file %s: %s", path, outcome)
                failures.append(FileFailure(path=path, error=outcome))
            else:
                raise outcome

        if failures:
            log.warning(
                "Skipped %d files due to errors: %s",
                len(failures),
                ", ".join(str(failure.path) for failure in failures),
            )

        if not processed:
            raise AggregationError(failures)

        return AggregateOutcome(
            results=aggregate, processed_files=processed, failures=failures
        )
