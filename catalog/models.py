from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class TranslationEntry:
    """One key/value pair of a strings file with its optional comment."""
    key: str
    value: str
    message: Optional[str] = None

    def __lt__(self, other: 'TranslationEntry') -> bool:
        return self.key < other.key


@dataclass
class Localization:
    """All entries of one language variant of a strings file.

    The translations list is owned by this localization and kept sorted by
    key. Duplicate keys are retained, but lookups only ever see the first one.
    """
    language: str
    translations: List[TranslationEntry] = field(default_factory=list)
    path: str = ""

    def sort(self):
        # Stable, so duplicates keep their relative order
        self.translations.sort(key=lambda entry: entry.key)

    def get_entry(self, key: str) -> Optional[TranslationEntry]:
        for entry in self.translations:
            if entry.key == key:
                return entry
        return None

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        entry = self.get_entry(key)
        return entry.value if entry is not None else default

    def keys(self) -> List[str]:
        return [entry.key for entry in self.translations]

    def update(self, key: str, value: str, message: Optional[str] = None):
        """Set the value and message of a key, adding the key if it is new.

        Args:
            key: Entry key
            value: New value
            message: New comment, None for no comment
        """
        entry = self.get_entry(key)
        if entry is not None:
            entry.value = value
            entry.message = message
        else:
            self.translations.append(TranslationEntry(key, value, message))
        self.sort()

    def __str__(self):
        return f"{self.language} ({self.path})"


@dataclass
class LocalizationGroup:
    """The language variants of one logical strings file."""
    name: str
    localizations: List[Localization] = field(default_factory=list)
    path: str = ""

    @property
    def languages(self) -> List[str]:
        return [localization.language for localization in self.localizations]

    def get_localization(self, language: str) -> Optional[Localization]:
        for localization in self.localizations:
            if localization.language == language:
                return localization
        return None

    def __lt__(self, other: 'LocalizationGroup') -> bool:
        return (self.name, self.path) < (other.name, other.path)

    def __str__(self):
        return f"{self.name} [{', '.join(self.languages)}]"
