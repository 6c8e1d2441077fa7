"""
Quarto executable resolution.

Quarto may be bundled next to the application, installed through an OS package
manager, or unpacked by hand into a user-local directory. The resolver lists the
candidates to try, bundled copies first, and builds a search path that also
covers the common manual-install locations. Processes launched from a desktop
shell often inherit a minimal PATH that leaves those out.
"""

import os
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from dotenv import load_dotenv

load_dotenv()

QUARTO_BUNDLE_DIR = os.getenv("QUARTO_BUNDLE_DIR", "quarto/quarto-1.4.550/bin")

# Replaces the whole computed search path when set
SEARCH_PATH_OVERRIDE_VAR = "QUARTO_SEARCH_PATH"

POSIX_INSTALL_DIRS = [
    "/usr/local/bin",
    "/opt/homebrew/bin",
    "/opt/quarto/bin",
    "/Applications/quarto/bin",
    "~/.local/bin",
]

WINDOWS_INSTALL_DIRS = [
    r"C:\Program Files\Quarto\bin",
    r"~\AppData\Local\Programs\Quarto\bin",
]


class ExecutableResolver:
    """
    Ordered Quarto candidates and the search path handed to the child process.

    Subclass and override candidates() or install_dirs() to support another
    install layout without touching the runner or the orchestrator.

    Args:
        bundle_dir: Directory holding the bundled Quarto binaries
        pathsep: Search-path separator (default: os.pathsep)
        install_dirs: Well-known directories appended to the search path
            (default: chosen from pathsep)
    """

    def __init__(
        self,
        bundle_dir: str = QUARTO_BUNDLE_DIR,
        pathsep: str = os.pathsep,
        install_dirs: Optional[Sequence[str]] = None,
    ):
        self.bundle_dir = bundle_dir
        self.pathsep = pathsep
        self._install_dirs = list(install_dirs) if install_dirs is not None else None

    def candidates(self) -> List[str]:
        """
        Candidate executables in priority order.

        Returns:
            [bundled unix binary, bundled windows binary, windows command shim, bare command]
        """
        bundle = self.bundle_dir.rstrip("/\\")
        return [
            f"{bundle}/quarto",
            f"{bundle}/quarto.exe",
            "quarto.cmd",
            "quarto",
        ]

    def install_dirs(self) -> List[str]:
        """Well-known Quarto install directories for the current platform."""
        if self._install_dirs is not None:
            dirs = self._install_dirs
        elif self.pathsep == ";":
            dirs = WINDOWS_INSTALL_DIRS
        else:
            dirs = POSIX_INSTALL_DIRS
        return [str(Path(d).expanduser()) if d.startswith("~") else d for d in dirs]

    def augmented_search_path(self, environ: Optional[Mapping[str, str]] = None) -> str:
        """
        Search path for the Quarto child process.

        Returns the override variable verbatim when it is set. Otherwise appends
        the well-known install directories missing from the current PATH,
        keeping existing entries and their order.

        Args:
            environ: Environment mapping to read (default: os.environ)

        Returns:
            Search path string joined with the platform separator
        """
        environ = os.environ if environ is None else environ

        override = environ.get(SEARCH_PATH_OVERRIDE_VAR)
        if override is not None:
            return override

        current = environ.get("PATH", "")
        entries = current.split(self.pathsep) if current else []
        for directory in self.install_dirs():
            if directory not in entries:
                entries.append(directory)

        return self.pathsep.join(entries)
