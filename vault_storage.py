#!/usr/bin/env python3
"""
Vault Storage for Genre Sync

Thin file-storage layer over an Obsidian vault directory. Provides the three
capabilities the genre sync needs:
- List all markdown notes in the vault
- Read a note's parsed YAML frontmatter
- Create a new note at a vault path (never overwriting)

Paths handed in and out are vault-relative and '/'-separated, the same form
Obsidian uses for file.path.
"""

import re
import logging
import unicodedata
from pathlib import Path
from typing import List, Dict, Optional, Any

import yaml

NOTE_EXTENSION = "md"

# Opening and closing delimiters are lines of exactly "---"
FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*$", re.DOTALL | re.MULTILINE)

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """
    Normalize a vault path to a platform-neutral form.

    Mirrors Obsidian's normalizePath:
    - "Music\\Artists" -> "Music/Artists"
    - "//Music//Artists/" -> "Music/Artists"
    - "" -> "/"
    """
    path = re.sub(r'[\\/]+', '/', path)
    path = path.strip('/')
    path = path.replace('\u00a0', ' ').replace('\u202f', ' ')
    path = unicodedata.normalize('NFC', path)
    return path or '/'


def parse_frontmatter(content: str) -> Optional[Dict[str, Any]]:
    """
    Extract the YAML frontmatter block from note content.

    Returns None if the note has no frontmatter or the block is not a mapping.
    Raises yaml.YAMLError on unparseable YAML.
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return None

    frontmatter = yaml.safe_load(match.group(1))

    if not isinstance(frontmatter, dict):
        return None

    return frontmatter


class VaultFile:
    """A markdown note in the vault, identified by its vault-relative path."""

    def __init__(self, path: str):
        self.path = path
        name = path.rsplit('/', 1)[-1]
        if '.' in name:
            self.basename, self.extension = name.rsplit('.', 1)
        else:
            self.basename, self.extension = name, ''

    def __eq__(self, other):
        return isinstance(other, VaultFile) and self.path == other.path

    def __hash__(self):
        return hash(self.path)

    def __repr__(self):
        return f"VaultFile({self.path!r})"


class VaultStorage:
    """Read and create notes in an Obsidian vault on disk."""

    def __init__(self, vault_dir: str):
        self.vault_dir = Path(vault_dir)

        if not self.vault_dir.is_dir():
            raise ValueError(f"Vault directory does not exist: {vault_dir}")

    def _absolute(self, path: str) -> Path:
        """Resolve a vault path on disk, refusing paths that leave the vault."""
        target = self.vault_dir.joinpath(*normalize_path(path).split('/'))
        vault_root = self.vault_dir.resolve()
        resolved = target.resolve()
        if resolved != vault_root and vault_root not in resolved.parents:
            raise ValueError(f"Path is outside the vault: {path}")
        return resolved

    def get_markdown_files(self) -> List[VaultFile]:
        """Get all markdown notes, skipping hidden folders like .obsidian."""
        files = []
        for file_path in self.vault_dir.rglob(f"*.{NOTE_EXTENSION}"):
            relative = file_path.relative_to(self.vault_dir)
            if any(part.startswith('.') for part in relative.parts):
                continue
            if not file_path.is_file():
                continue
            files.append(VaultFile(relative.as_posix()))

        logger.debug(f"Found {len(files)} markdown notes in {self.vault_dir}")
        return sorted(files, key=lambda f: f.path)

    def get_frontmatter(self, file: VaultFile) -> Optional[Dict[str, Any]]:
        """
        Read a note's parsed frontmatter.

        Returns None when the note has no usable frontmatter; malformed YAML is
        logged rather than raised.
        """
        try:
            content = self._absolute(file.path).read_text(encoding='utf-8')
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {file.path}: {e}")
            return None

        try:
            return parse_frontmatter(content)
        except yaml.YAMLError as e:
            logger.warning(f"Malformed frontmatter in {file.path}: {e}")
            return None

    def create(self, path: str, content: str) -> VaultFile:
        """
        Create a new note at the given vault path.

        Raises FileExistsError if a note is already there, ValueError if the
        path points outside the vault.
        """
        target = self._absolute(path)
        target.parent.mkdir(parents=True, exist_ok=True)

        # 'x' mode fails instead of overwriting
        with open(target, 'x', encoding='utf-8') as f:
            f.write(content)

        return VaultFile(normalize_path(path))
