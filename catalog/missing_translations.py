from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .models import LocalizationGroup


@dataclass
class MissingTranslations:
    """Keys of one localization group that some languages lack.

    Keys are taken from the union of all languages of the group.
    """
    group_name: str
    group_path: str
    missing_language_groups: List[Tuple[str, List[str]]] = field(default_factory=list)
    blank_value_groups: List[Tuple[str, List[str]]] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return len(self.missing_language_groups) > 0 or len(self.blank_value_groups) > 0

    def get_total_errors(self) -> Dict[str, int]:
        """Get a count of all error types."""
        return {
            'missing_translations': sum(len(languages) for _, languages in self.missing_language_groups),
            'blank_values': sum(len(languages) for _, languages in self.blank_value_groups),
        }

    def get_invalid_languages(self) -> List[str]:
        return sorted(set(lang for _, langs in self.missing_language_groups for lang in langs) |
                      set(lang for _, langs in self.blank_value_groups for lang in langs))


def find_missing_translations(group: LocalizationGroup) -> MissingTranslations:
    """Find keys that are absent or blank in some languages of a group.

    Args:
        group: The group to audit

    Returns:
        MissingTranslations: Per key, the languages lacking a usable value
    """
    result = MissingTranslations(group.name, group.path)
    all_keys = sorted(set(key for localization in group.localizations for key in localization.keys()))

    for key in all_keys:
        missing = []
        blank = []
        for localization in group.localizations:
            entry = localization.get_entry(key)
            if entry is None:
                missing.append(localization.language)
            elif entry.value.strip() == "":
                blank.append(localization.language)
        if missing:
            result.missing_language_groups.append((key, missing))
        if blank:
            result.blank_value_groups.append((key, blank))

    return result
