"""
Pass orchestration.

One pass walks the working set, turns every reference found in the configured
metadata field into a job, starts all loads at once and waits for them
jointly. Each job writes its own value back as soon as its load settles.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, MutableMapping
from dataclasses import dataclass, field
from typing import Any

from .cache import LoadCache, Reader
from .config import LoaderOptions
from .errors import DataLoadError, ReferenceLoadError
from .matching import DocumentMatcher
from .paths import resolve_reference
from .project import Project
from .pruning import maybe_prune
from .references import ReferenceJob, enumerate_jobs

logger = logging.getLogger(__name__)

Files = MutableMapping[str, Any]


@dataclass
class LoadResult:
    job_count: int = 0
    loaded: int = 0
    files_read: list[str] = field(default_factory=list)
    pruned: list[str] = field(default_factory=list)
    skipped: list[ReferenceLoadError] = field(default_factory=list)
    failures: list[ReferenceLoadError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class DataLoader:
    def __init__(
        self,
        options: LoaderOptions | dict[str, Any] | None = None,
        *,
        reader: Reader | None = None,
        cache: LoadCache | None = None,
    ):
        if not isinstance(options, LoaderOptions):
            options = LoaderOptions.from_dict(options)
        self.options = options
        self.matcher = DocumentMatcher(options.match, options.match_options)
        self.cache = cache if cache is not None else LoadCache(reader)

    def run(self, files: Files, project: Project | None = None) -> LoadResult:
        return asyncio.run(self.run_async(files, project))

    async def run_async(
        self, files: Files, project: Project | None = None
    ) -> LoadResult:
        """
        Resolve every reference in `files` in place.

        Raises the first unrecoverable ReferenceLoadError, in enumeration
        order, after every job has settled. Values written by other jobs stay
        in place.
        """
        project = project or Project()
        result = LoadResult()
        self.cache.reset()
        pending: list[asyncio.Future[None]] = []
        try:
            try:
                self._start_jobs(files, project, result, pending)
            except BaseException:
                for task in pending:
                    task.cancel()
                await asyncio.gather(*pending, return_exceptions=True)
                raise
            result.job_count = len(pending)
            logger.debug("Finished scanning for files to load: %d jobs", len(pending))
            outcomes = await asyncio.gather(*pending, return_exceptions=True)
            result.files_read = self.cache.paths()
        finally:
            self.cache.reset()

        for outcome in outcomes:
            if outcome is None:
                result.loaded += 1
            elif isinstance(outcome, ReferenceLoadError):
                if self.options.ignore_read_failure and outcome.tolerable:
                    logger.warning("Skipping unresolved reference: %s", outcome)
                    result.skipped.append(outcome)
                else:
                    result.failures.append(outcome)
            else:
                raise outcome
        logger.debug(
            "Data loading done: %d loaded, %d skipped, %d failed",
            result.loaded,
            len(result.skipped),
            len(result.failures),
        )
        if result.failures:
            raise result.failures[0]
        return result

    def _start_jobs(
        self,
        files: Files,
        project: Project,
        result: LoadResult,
        pending: list[asyncio.Future[None]],
    ) -> None:
        for source_path in list(files):
            # may already be gone, pruned by an earlier document
            document = files.get(source_path)
            if not isinstance(document, MutableMapping) or not document:
                continue
            if not self.matcher.match(source_path, project.sep):
                continue
            jobs = enumerate_jobs(source_path, document, self.options.data_property)
            if jobs:
                logger.debug("Adding %d job(s): %s", len(jobs), source_path)
            for job in jobs:
                pruned = maybe_prune(
                    source_path,
                    job.reference,
                    files,
                    self.options.remove_source,
                    project,
                )
                if pruned is not None:
                    result.pruned.append(pruned)
                pending.append(asyncio.ensure_future(self._run_job(job, project)))

    async def _run_job(self, job: ReferenceJob, project: Project) -> None:
        path = resolve_reference(
            job.source_path, job.reference, self.options.directory, project
        )
        logger.debug("Resolved file (%s) + (%s): %s", job.source_path, job.reference, path)
        try:
            value = await self.cache.load(path)
        except DataLoadError as exc:
            raise ReferenceLoadError(
                exc, reference=job.reference, path=path, source_path=job.source_path
            ) from exc
        job.write(value)


def data_loader(
    options: LoaderOptions | dict[str, Any] | None = None,
    *,
    reader: Reader | None = None,
) -> Callable[[Files, Project | None], LoadResult]:
    """Build a pipeline stage callable as `stage(files, project)`."""
    loader = DataLoader(options, reader=reader)

    def stage(files: Files, project: Project | None = None) -> LoadResult:
        return loader.run(files, project)

    return stage
