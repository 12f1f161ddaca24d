"""Loading the non-test Go files of a package directory."""

import logging
import os
from pathlib import Path

from goimpl_analyser.errors import PackageLoadError
from goimpl_analyser.models import PackageUnit, SkippedFile
from goimpl_analyser.parser import GoSourceParser

logger = logging.getLogger(__name__)

_DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB


class PackageLoader:
    """Collects and parses the package sources of one directory.

    Files that cannot be read, are too large or contain syntax errors are
    skipped and recorded on the returned unit. Only a directory that cannot
    be listed is an error.
    """

    def __init__(
        self,
        parser: GoSourceParser | None = None,
        max_file_size: int = _DEFAULT_MAX_FILE_SIZE,
    ) -> None:
        """Initialise the loader.

        Args:
            parser: Go parser to use (default: a new GoSourceParser)
            max_file_size: Skip files larger than this size in bytes

        """
        self._parser = parser or GoSourceParser()
        self._max_file_size = max_file_size

    def load(self, directory: Path) -> PackageUnit:
        """Parse the immediate non-test Go files of a directory.

        Args:
            directory: Package directory

        Returns:
            PackageUnit with the files that parsed, in file name order

        Raises:
            PackageLoadError: If the directory cannot be listed

        """
        unit = PackageUnit(directory=directory)

        for path in self._source_files(directory):
            try:
                size = path.stat().st_size
                if size > self._max_file_size:
                    logger.warning("Skipping large source: %s (%d bytes)", path, size)
                    unit.skipped.append(SkippedFile(path, f"file too large ({size} bytes)"))
                    continue
                parsed = self._parser.parse_file(path)
            except OSError as e:
                logger.warning("Skipping unreadable source %s: %s", path, e)
                unit.skipped.append(SkippedFile(path, f"unreadable: {e}"))
                continue

            if parsed.has_syntax_error:
                logger.debug(
                    "Skipping %s: syntax error at line %d", path, parsed.syntax_error_line
                )
                unit.skipped.append(
                    SkippedFile(path, f"syntax error at line {parsed.syntax_error_line}")
                )
                continue
            if parsed.package_name is None:
                logger.debug("Skipping %s: missing package clause", path)
                unit.skipped.append(SkippedFile(path, "missing package clause"))
                continue

            unit.files.append(parsed)

        if unit.files:
            unit.package_name = unit.files[0].package_name

        logger.debug(
            "Loaded %d file(s) from %s (%d skipped)",
            len(unit.files),
            directory,
            len(unit.skipped),
        )
        return unit

    def _source_files(self, directory: Path) -> list[Path]:
        try:
            with os.scandir(directory) as entries:
                return sorted(
                    Path(entry.path)
                    for entry in entries
                    if entry.is_file() and self._parser.is_supported_file(Path(entry.name))
                )
        except OSError as e:
            raise PackageLoadError(f"cannot read directory {directory}: {e}") from e
