"""Project root detection and fully qualified package paths."""

import logging
import os
import posixpath
from dataclasses import dataclass
from pathlib import Path

from goimpl_analyser.errors import NoModuleDeclarationError, RootNotFoundError

logger = logging.getLogger(__name__)

MANIFEST_FILE = "go.mod"
_MODULE_KEYWORD = "module"


def parse_module_path(manifest: str) -> str | None:
    """Return the module path declared by go.mod content.

    The first line starting with the `module` keyword wins. Surrounding
    whitespace, a trailing `//` comment and quotes are removed.

    Example:
        >>> parse_module_path("module   github.com/test/repo   \\n\\ngo 1.21\\n")
        'github.com/test/repo'
        >>> parse_module_path("go 1.21\\n") is None
        True

    """
    for raw_line in manifest.splitlines():
        line = raw_line.strip()
        if not line.startswith(_MODULE_KEYWORD):
            continue
        rest = line[len(_MODULE_KEYWORD) :]
        if not rest or not rest[0].isspace():
            continue
        rest = rest.split("//", 1)[0].strip().strip('"`')
        if rest:
            return rest
    return None


@dataclass(frozen=True)
class ModuleRoot:
    """The project root directory and the module path declared in its go.mod."""

    root: Path
    module_path: str

    @classmethod
    def from_directory(cls, directory: Path | None = None) -> "ModuleRoot":
        """Read go.mod from a directory (the current working directory by default).

        Only that directory is checked; parent directories are not searched.

        Raises:
            RootNotFoundError: If go.mod is not present
            NoModuleDeclarationError: If go.mod has no module line

        """
        root = (directory or Path.cwd()).absolute()
        manifest = root / MANIFEST_FILE
        if not manifest.is_file():
            raise RootNotFoundError(
                f"{MANIFEST_FILE} not found in current directory: {root}"
            )

        try:
            content = manifest.read_text(encoding="utf-8")
        except OSError as e:
            raise RootNotFoundError(f"failed to read {manifest}: {e}") from e

        module_path = parse_module_path(content)
        if module_path is None:
            raise NoModuleDeclarationError(
                f"no module declaration found in {manifest}"
            )

        logger.debug("Module root %s declares module %s", root, module_path)
        return cls(root=root, module_path=module_path)

    def package_path_for(self, directory: Path) -> str:
        """Return the import path of a package directory.

        Relative directories are taken relative to the project root.

        Example:
            >>> ModuleRoot(Path("/repo"), "github.com/test/repo").package_path_for(
            ...     Path("./pkg/testpkg"))
            'github.com/test/repo/pkg/testpkg'

        """
        target = directory if directory.is_absolute() else self.root / directory
        relative = os.path.relpath(os.path.abspath(target), self.root)
        relative = relative.replace(os.sep, "/")
        if relative == ".":
            return self.module_path
        return posixpath.normpath(posixpath.join(self.module_path, relative))
