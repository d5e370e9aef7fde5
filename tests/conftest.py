"""Shared fixtures: small Obsidian vaults built on disk."""

import json

import pytest


def write_note(vault, relative_path, content):
    """Write a note into the vault, creating folders as needed."""
    note_path = vault.joinpath(*relative_path.split("/"))
    note_path.parent.mkdir(parents=True, exist_ok=True)
    note_path.write_text(content, encoding="utf-8")
    return note_path


def write_settings(vault, data):
    """Write the plugin data file the settings store reads."""
    data_file = vault / ".obsidian" / "plugins" / "genre-sync" / "data.json"
    data_file.parent.mkdir(parents=True, exist_ok=True)
    data_file.write_text(json.dumps(data), encoding="utf-8")
    return data_file


@pytest.fixture
def vault(tmp_path):
    """Empty vault directory."""
    vault_dir = tmp_path / "vault"
    vault_dir.mkdir()
    return vault_dir


@pytest.fixture
def artist_vault(vault):
    """Vault with two artists sharing "Dream Pop" and one note without frontmatter."""
    write_note(
        vault,
        "Music/Artists/Slowdive.md",
        "---\ntitle: Slowdive\ngenres:\n  - Dream Pop\n  - shoegaze\n---\n\n# Slowdive\n",
    )
    write_note(
        vault,
        "Music/Artists/Beach House.md",
        "---\ntitle: Beach House\ngenres: Dream Pop\n---\n\n# Beach House\n",
    )
    write_note(vault, "Music/Artists/Notes.md", "Just some notes, no metadata.\n")
    write_settings(vault, {"artistFolder": "Music/Artists", "genreFolder": "Music/Genres"})
    return vault
