"""Recursive directory walk driving load, resolve and match per package.

Directories are visited in pre-order: a directory first, then its
subdirectories sorted by name. Results are merged in that order whether
directories are analysed sequentially or on a thread pool, so the output of
a scan is deterministic.
"""

import logging
import os
import threading
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from time import monotonic

from goimpl_analyser.aggregator import ResultAggregator
from goimpl_analyser.config import FinderConfig
from goimpl_analyser.errors import (
    NoFilesError,
    PackageLoadError,
    RootDirectoryNotFoundError,
    ScanCancelledError,
    ScanTimeoutError,
)
from goimpl_analyser.matcher import ConformanceMatcher
from goimpl_analyser.models import Implementation
from goimpl_analyser.module_path import ModuleRoot
from goimpl_analyser.package_loader import PackageLoader
from goimpl_analyser.resolver import TolerantResolver

logger = logging.getLogger(__name__)


@dataclass
class _DirectoryOutcome:
    """Internal result of analysing one directory."""

    directory: Path
    implementations: list[Implementation] = field(default_factory=list)
    error: str | None = None
    analysed: bool = False


class DirectoryWalker:
    """Visits every directory under a search root and collects implementations."""

    def __init__(  # noqa: PLR0913 - collaborators are injected explicitly
        self,
        matcher: ConformanceMatcher,
        module_root: ModuleRoot,
        config: FinderConfig | None = None,
        loader: PackageLoader | None = None,
        resolver: TolerantResolver | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Initialise the walker.

        Args:
            matcher: Matcher holding the required interface
            module_root: Project root used to build package paths
            config: Finder configuration (default: FinderConfig())
            loader: Package loader for sequential scans (default: built from config)
            resolver: Resolver to use (default: a new TolerantResolver)
            cancel_event: Stops the walk at the next directory boundary when set

        """
        self._config = config or FinderConfig()
        self._matcher = matcher
        self._module_root = module_root
        self._loader = loader or PackageLoader(max_file_size=self._config.max_file_size)
        self._resolver = resolver or TolerantResolver()
        self._cancel_event = cancel_event
        self._worker_state = threading.local()

    def iter_directories(self, root: Path) -> Iterator[Path]:
        """Yield root and every subdirectory in deterministic pre-order.

        Directory symlinks are not followed and names listed in
        `exclude_dirs` are pruned below the root. A subdirectory that cannot
        be listed is still yielded; its children are skipped.
        """
        yield root
        try:
            with os.scandir(root) as entries:
                children = sorted(
                    entry.name
                    for entry in entries
                    if entry.is_dir(follow_symlinks=False)
                    and entry.name not in self._config.exclude_dirs
                )
        except OSError as e:
            logger.debug("Cannot list %s: %s", root, e)
            return
        for name in children:
            yield from self.iter_directories(root / name)

    def scan(self, root: Path, aggregator: ResultAggregator) -> None:
        """Walk the search root and add every implementation to the aggregator.

        Args:
            root: Search root directory
            aggregator: Receives implementations, errors and counters

        Raises:
            RootDirectoryNotFoundError: If root does not exist or is not a directory
            ScanCancelledError: If the cancel event is set during the walk
            ScanTimeoutError: If the configured timeout elapses during the walk

        """
        if not root.is_dir():
            raise RootDirectoryNotFoundError(f"search directory does not exist: {root}")

        deadline = (
            monotonic() + self._config.timeout
            if self._config.timeout is not None
            else None
        )

        if self._config.max_workers == 1:
            for directory in self.iter_directories(root):
                self._check_cancelled(deadline)
                self._merge(self._analyse(directory, self._loader), aggregator)
            return

        directories = list(self.iter_directories(root))
        logger.debug(
            "Analysing %d directories with %d workers",
            len(directories),
            self._config.max_workers,
        )
        with ThreadPoolExecutor(max_workers=self._config.max_workers) as pool:
            futures = [
                pool.submit(self._analyse_in_worker, directory, deadline)
                for directory in directories
            ]
            try:
                for future in futures:
                    self._merge(future.result(), aggregator)
            except BaseException:
                pool.shutdown(wait=True, cancel_futures=True)
                raise

    def _analyse_in_worker(self, directory: Path, deadline: float | None) -> _DirectoryOutcome:
        self._check_cancelled(deadline)
        loader = getattr(self._worker_state, "loader", None)
        if loader is None:
            # tree-sitter parsers are not thread-safe, one loader per worker
            loader = PackageLoader(max_file_size=self._config.max_file_size)
            self._worker_state.loader = loader
        return self._analyse(directory, loader)

    def _analyse(self, directory: Path, loader: PackageLoader) -> _DirectoryOutcome:
        outcome = _DirectoryOutcome(directory=directory)
        try:
            unit = loader.load(directory)
            if not unit.files:
                return outcome
            scope = self._resolver.resolve(unit.files)
        except (PackageLoadError, NoFilesError) as e:
            logger.warning("Skipping directory %s: %s", directory, e)
            outcome.error = str(e)
            return outcome

        outcome.analysed = True
        matches = self._matcher.match(scope)
        if not matches:
            return outcome

        package_path = self._module_root.package_path_for(directory)
        for symbol in matches:
            logger.debug("Found %s.%s in %s", scope.package_name, symbol.name, package_path)
            outcome.implementations.append(
                Implementation(
                    package=scope.package_name,
                    struct=symbol.name,
                    package_path=package_path,
                )
            )
        return outcome

    def _merge(self, outcome: _DirectoryOutcome, aggregator: ResultAggregator) -> None:
        aggregator.mark_visited(outcome.analysed)
        if outcome.error is not None:
            aggregator.record_error(str(outcome.directory), outcome.error)
        for implementation in outcome.implementations:
            aggregator.add(implementation)

    def _check_cancelled(self, deadline: float | None) -> None:
        if self._cancel_event is not None and self._cancel_event.is_set():
            raise ScanCancelledError("scan cancelled")
        if deadline is not None and monotonic() > deadline:
            raise ScanTimeoutError(f"scan timed out after {self._config.timeout} seconds")
