from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List

from .models import LocalizationGroup


@dataclass
class CatalogScanResults:
    """Results from one discovery scan of a project directory."""
    root: str
    scan_timestamp: datetime
    groups: List[LocalizationGroup] = field(default_factory=list)
    total_files: int = 0

    # Per file outcomes, keyed by file path
    fallback_files: List[str] = field(default_factory=list)
    empty_files: Dict[str, str] = field(default_factory=dict)
    unknown_language_files: Dict[str, str] = field(default_factory=dict)
    duplicate_language_files: List[str] = field(default_factory=list)

    @classmethod
    def create(cls, root: str) -> 'CatalogScanResults':
        return cls(root=root, scan_timestamp=datetime.now())

    @property
    def total_groups(self) -> int:
        return len(self.groups)

    @property
    def total_entries(self) -> int:
        return sum(len(localization.translations)
                   for group in self.groups
                   for localization in group.localizations)

    @property
    def has_problems(self) -> bool:
        return bool(self.empty_files or self.unknown_language_files or self.duplicate_language_files)

    def get_languages(self) -> List[str]:
        languages = set()
        for group in self.groups:
            languages.update(group.languages)
        return sorted(languages)

    def format_status_report(self) -> str:
        """Generate a human-readable status report."""
        lines = [
            f"Project Directory: {self.root}",
            f"Scanned at: {self.scan_timestamp}",
            f"Strings Files: {self.total_files}",
            f"Groups: {self.total_groups}",
            f"Languages: {', '.join(lang or '(unknown)' for lang in self.get_languages())}",
            f"Entries: {self.total_entries}",
        ]

        if self.groups:
            lines.append("\nGroups:")
            for group in self.groups:
                lines.append(f"- {group.name} ({group.path})")
                for localization in group.localizations:
                    lines.append(f"  • {localization.language or '(unknown)'}: "
                                 f"{len(localization.translations)} entries")

        if self.fallback_files:
            lines.append("\nLoaded as property list:")
            lines.extend(f"- {path}" for path in self.fallback_files)

        if self.empty_files:
            lines.append("\nUnreadable (no entries loaded):")
            lines.extend(f"- {path}: {reason}" for path, reason in self.empty_files.items())

        if self.unknown_language_files:
            lines.append("\nOutside a language directory:")
            lines.extend(f"- {path}: {reason}" for path, reason in self.unknown_language_files.items())

        if self.duplicate_language_files:
            lines.append("\nSkipped (language already present in group):")
            lines.extend(f"- {path}" for path in self.duplicate_language_files)

        return "\n".join(lines)
