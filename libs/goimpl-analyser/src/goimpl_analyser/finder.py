"""Implementation finder: the entry point tying extraction and the walk together."""

import logging
import threading
from pathlib import Path

from goimpl_analyser.aggregator import ResultAggregator
from goimpl_analyser.config import FinderConfig
from goimpl_analyser.errors import InterfaceFileNotFoundError, RootDirectoryNotFoundError
from goimpl_analyser.interface_extractor import InterfaceExtractor
from goimpl_analyser.matcher import ConformanceMatcher
from goimpl_analyser.models import InterfaceSpec, ScanReport
from goimpl_analyser.module_path import ModuleRoot
from goimpl_analyser.package_loader import PackageLoader
from goimpl_analyser.parser import GoSourceParser
from goimpl_analyser.resolver import TolerantResolver
from goimpl_analyser.walker import DirectoryWalker

logger = logging.getLogger(__name__)


class ImplementationFinder:
    """Finds every struct under a search directory that satisfies an interface.

    Fatal problems (missing inputs, missing go.mod, an interface that cannot
    be extracted) are raised before any directory is visited. Problems with
    individual directories are recorded in the returned report.

    Example:
        >>> finder = ImplementationFinder(FinderConfig(max_workers=4))
        >>> report = finder.find(Path("internal/app/app.go"), "App", Path("."))
        >>> [(i.package, i.struct) for i in report.implementations]
        [('something1', 'WebServer'), ('something2', 'ServiceDaemon'), ('something3', 'MicroService')]

    """

    def __init__(
        self,
        config: FinderConfig | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Initialise the finder.

        Args:
            config: Finder configuration (default: FinderConfig())
            cancel_event: Stops a running scan at the next directory when set

        """
        self._config = config or FinderConfig()
        self._cancel_event = cancel_event
        self._parser = GoSourceParser()

    @property
    def config(self) -> FinderConfig:
        """Return the finder configuration."""
        return self._config

    def extract_interface(
        self, interface_file: Path, interface_name: str, cwd: Path | None = None
    ) -> InterfaceSpec:
        """Extract the required method names of an interface.

        Args:
            interface_file: Go file declaring the interface, relative to cwd if not absolute
            interface_name: Name of the interface type
            cwd: Working directory (default: the process working directory)

        """
        base = (cwd or Path.cwd()).absolute()
        extractor = InterfaceExtractor(
            self._parser, flatten_embedded=self._config.flatten_embedded
        )
        return extractor.extract(_under(base, interface_file), interface_name)

    def find(
        self,
        interface_file: Path,
        interface_name: str,
        search_dir: Path,
        cwd: Path | None = None,
    ) -> ScanReport:
        """Run a full scan.

        Args:
            interface_file: Go file declaring the interface, relative to cwd if not absolute
            interface_name: Name of the interface type
            search_dir: Root of the walk, relative to cwd if not absolute
            cwd: Working directory holding go.mod (default: the process working directory)

        Returns:
            ScanReport with implementations in discovery order

        Raises:
            InterfaceFileNotFoundError: If the interface file does not exist
            RootDirectoryNotFoundError: If the search directory does not exist
            RootNotFoundError: If go.mod is not present in cwd
            NoModuleDeclarationError: If go.mod has no module line
            InterfaceResolutionError: If the interface cannot be extracted
            ScanCancelledError: If the scan is cancelled or times out

        """
        base = (cwd or Path.cwd()).absolute()
        interface_path = _under(base, interface_file)
        search_root = _under(base, search_dir)

        if not interface_path.exists():
            raise InterfaceFileNotFoundError(
                f"interface file does not exist: {interface_file}"
            )
        if not search_root.exists():
            raise RootDirectoryNotFoundError(
                f"search directory does not exist: {search_dir}"
            )

        module_root = ModuleRoot.from_directory(base)
        interface = self.extract_interface(interface_path, interface_name, base)

        logger.info(
            "Searching %s for implementations of %s (%d method(s))",
            search_root,
            interface.name,
            len(interface.required_methods),
        )

        walker = DirectoryWalker(
            ConformanceMatcher(interface),
            module_root,
            config=self._config,
            loader=PackageLoader(self._parser, max_file_size=self._config.max_file_size),
            resolver=TolerantResolver(),
            cancel_event=self._cancel_event,
        )
        aggregator = ResultAggregator()
        walker.scan(search_root, aggregator)

        report = aggregator.to_report(interface)
        logger.info(
            "Found %d implementation(s) in %d package(s), %d directory error(s)",
            len(report.implementations),
            report.packages_analysed,
            len(report.errors),
        )
        return report


def _under(base: Path, path: Path) -> Path:
    return path if path.is_absolute() else base / path
