#!/usr/bin/env python3
"""
Genre Sync Settings

Loads and saves the two genre sync settings (artist folder, genre folder) in
the vault's plugin data file:

    <vault>/.obsidian/plugins/genre-sync/data.json
    {"artistFolder": "Music/Artists", "genreFolder": "Music/Genres"}

Absent keys default to an empty string.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any

PLUGIN_ID = "genre-sync"
DATA_FILE = "data.json"

ARTIST_FOLDER_KEY = "artistFolder"
GENRE_FOLDER_KEY = "genreFolder"

logger = logging.getLogger(__name__)


@dataclass
class GenreSyncSettings:
    """Artist and genre folder paths, as typed by the user."""

    artist_folder: str = ""
    genre_folder: str = ""
    # Keys we don't own, kept so saving never drops them
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenreSyncSettings":
        def text(key):
            value = data.get(key)
            return value if isinstance(value, str) else ""

        extra = {k: v for k, v in data.items() if k not in (ARTIST_FOLDER_KEY, GENRE_FOLDER_KEY)}
        return cls(text(ARTIST_FOLDER_KEY), text(GENRE_FOLDER_KEY), extra)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            ARTIST_FOLDER_KEY: self.artist_folder,
            GENRE_FOLDER_KEY: self.genre_folder,
        }

    def is_complete(self) -> bool:
        return bool(self.artist_folder.strip()) and bool(self.genre_folder.strip())


class SettingsStore:
    """Persist GenreSyncSettings as the plugin's JSON data file."""

    def __init__(self, vault_dir: str):
        self.data_file = Path(vault_dir) / ".obsidian" / "plugins" / PLUGIN_ID / DATA_FILE

    def load(self) -> GenreSyncSettings:
        """Load settings, falling back to defaults if the file is missing or unreadable."""
        if not self.data_file.exists():
            return GenreSyncSettings()

        try:
            with open(self.data_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load settings from {self.data_file}: {e}")
            return GenreSyncSettings()

        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {self.data_file}: expected a JSON object")
            return GenreSyncSettings()

        return GenreSyncSettings.from_dict(data)

    def save(self, settings: GenreSyncSettings) -> None:
        self.data_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.data_file, 'w', encoding='utf-8') as f:
            json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)

    def update(self, artist_folder: str = None, genre_folder: str = None) -> GenreSyncSettings:
        """Change one or both settings and save immediately."""
        settings = self.load()
        if artist_folder is not None:
            settings.artist_folder = artist_folder
        if genre_folder is not None:
            settings.genre_folder = genre_folder
        self.save(settings)
        logger.info(f"Saved settings to {self.data_file}")
        return settings
