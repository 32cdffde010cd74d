"""Content file discovery under the fixed category directories."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from importer.errors import DiscoveryError

logger = logging.getLogger(__name__)

CATEGORIES = ("subjects", "past-questions", "modules")
SPREADSHEET_EXTENSIONS = {".xlsx", ".xlsm"}
# Office writes "~$name.xlsx" lock files next to open workbooks
LOCK_FILE_PREFIX = "~"


@dataclass(frozen=True)
class ContentFile:
    file_path: Path
    file_name: str
    category: str


def is_content_file(path: Path) -> bool:
    return (
        path.is_file()
        and path.suffix.lower() in SPREADSHEET_EXTENSIONS
        and not path.name.startswith(LOCK_FILE_PREFIX)
    )


class FileScanner:
    """Best-effort discovery of workbooks under ``content_root``."""

    def __init__(self, content_root: str | Path = "./content") -> None:
        self.content_root = Path(content_root)
        self.missing_directories: list[str] = []

    def scan_all(self) -> list[ContentFile]:
        self.missing_directories = []
        files: list[ContentFile] = []
        for category in CATEGORIES:
            files.extend(self._scan(category))
        return files

    def scan_category(self, category: str) -> list[ContentFile]:
        if category not in CATEGORIES:
            raise ValueError(f"Unknown content category {category!r}; expected one of {', '.join(CATEGORIES)}")
        self.missing_directories = []
        return self._scan(category)

    def _scan(self, category: str) -> list[ContentFile]:
        directory = self.content_root / category
        if not directory.is_dir():
            problem = DiscoveryError(str(directory))
            logger.warning("%s", problem)
            self.missing_directories.append(str(directory))
            return []

        return [
            ContentFile(file_path=path, file_name=path.name, category=category)
            for path in sorted(directory.iterdir(), key=lambda p: p.name)
            if is_content_file(path)
        ]
