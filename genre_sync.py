#!/usr/bin/env python3
"""
Genre Sync - Update Genre Pages

Scans the artist notes of an Obsidian vault, collects every genre declared in
their frontmatter, and creates a genre page for each genre that doesn't have
one yet.

Workflow:
1. Load the artist/genre folder settings from the plugin data file
2. Collect genres from all notes under the artist folder (case/whitespace-insensitive)
3. Collect existing genre pages under the genre folder
4. Create a page for every missing genre with:
   - chosic.com genre chart and everynoise.com genre map links in frontmatter
   - a dataview query listing the artists of that genre

Existing genre pages are never modified, so running it again is a no-op.

Usage:
    python genre_sync.py --vault path/to/vault [--dry-run]
    python genre_sync.py --vault path/to/vault --artist-folder Music/Artists --genre-folder Music/Genres
"""

import os
import sys
import logging
import argparse
from typing import List, Set

from tqdm import tqdm

from genre_pages import extract_genres, normalize_genre, generate_genre_page, sanitize_filename
from genre_sync_settings import GenreSyncSettings, SettingsStore
from vault_storage import VaultStorage, VaultFile, normalize_path

LOG_FILE = "genre_sync.log"


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the sync."""
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(LOG_FILE)
        ]
    )
    logging.getLogger().setLevel(numeric_level)


class GenrePageSynchronizer:
    """Create missing genre pages from the genres declared in artist notes."""

    def __init__(self, storage, dry_run: bool = False):
        """
        Args:
            storage: Note storage providing get_markdown_files(),
                get_frontmatter(file) and create(path, content)
            dry_run: Log the pages that would be created without writing them
        """
        self.storage = storage
        self.dry_run = dry_run
        self.logger = logging.getLogger(__name__)

        self.aborted = False
        self.created_paths: List[str] = []

        # Statistics
        self.stats = {
            'artist_notes': 0,
            'genre_notes': 0,
            'discovered': 0,
            'existing': 0,
            'missing': 0,
            'created': 0,
            'skipped_existing': 0,
            'malformed': 0,
            'errors': 0
        }

    def collect_genres(self, artist_files: List[VaultFile]) -> Set[str]:
        """Extract and normalize the genres of all artist notes."""
        genres = set()

        with tqdm(artist_files, desc="Reading artists", unit="note") as pbar:
            for file in pbar:
                pbar.set_description(f"Reading: {file.basename[:30]}")
                self.logger.debug(f"Reading file: {file.path}")

                try:
                    frontmatter = self.storage.get_frontmatter(file)
                    raw_genres = extract_genres(frontmatter)
                except Exception as e:
                    self.logger.warning(f"Skipping genres of {file.path}: {e}")
                    self.stats['malformed'] += 1
                    continue

                for raw in raw_genres:
                    genre = normalize_genre(raw)
                    if genre:
                        genres.add(genre)

                if raw_genres:
                    self.logger.debug(f"Extracted genres from {file.path}: {raw_genres}")

        return genres

    def existing_genres(self, genre_files: List[VaultFile]) -> Set[str]:
        """Canonical genres that already have a page, keyed by filename."""
        return {normalize_genre(file.basename) for file in genre_files}

    def create_genre_page(self, genre: str, artist_folder: str, genre_folder: str,
                          existing: Set[str]) -> str:
        """
        Create the page for one missing genre.

        Failures are logged and counted; they never stop the remaining genres.

        Returns: Status message string
        """
        page = generate_genre_page(genre, artist_folder, genre_folder)

        # Sanitized filename can differ from the genre, e.g. "ac/dc" -> "ac_dc.md"
        if normalize_genre(sanitize_filename(genre)) in existing:
            self.logger.info(f"Genre page already exists under sanitized name: {page.path}")
            self.stats['skipped_existing'] += 1
            return "⏭️  Exists"

        if self.dry_run:
            self.logger.info(f"[DRY RUN] Would create genre page: {page.path}")
            self.created_paths.append(page.path)
            return "🔍 Would create"

        try:
            self.storage.create(page.path, page.text)
        except Exception as e:
            self.logger.error(f"Error creating genre page {page.path}: {e}")
            self.stats['errors'] += 1
            return f"❌ Error: {str(e)[:30]}"

        self.logger.info(f"Created genre page: {page.path}")
        self.created_paths.append(page.path)
        self.stats['created'] += 1
        return "✨ Created"

    def reconcile(self, settings: GenreSyncSettings) -> None:
        """Create a page for every genre found in artist notes that has none yet."""
        self.logger.info("Updating genre pages...")

        if not settings.is_complete():
            self.logger.warning("Artist and genre folders must be set in the settings before running the command.")
            self.aborted = True
            return

        artist_folder = normalize_path(settings.artist_folder)
        genre_folder = normalize_path(settings.genre_folder)

        # Snapshot taken before any page is created
        files = self.storage.get_markdown_files()
        artist_files = [f for f in files if f.path.startswith(artist_folder)]
        genre_files = [f for f in files if f.path.startswith(genre_folder)]
        self.stats['artist_notes'] = len(artist_files)
        self.stats['genre_notes'] = len(genre_files)

        discovered = self.collect_genres(artist_files)
        self.stats['discovered'] = len(discovered)
        self.logger.info(f"Final extracted genres: {sorted(discovered)}")

        existing = self.existing_genres(genre_files)
        self.stats['existing'] = len(existing)
        self.logger.info(f"Existing genres in folder: {sorted(existing)}")

        missing = sorted(discovered - existing)
        self.stats['missing'] = len(missing)
        self.logger.info(f"Missing genres to be created: {missing}")

        with tqdm(missing, desc="Creating genre pages", unit="page") as pbar:
            for genre in pbar:
                pbar.set_description(f"Creating: {genre[:30]}")
                status = self.create_genre_page(genre, artist_folder, genre_folder, existing)
                pbar.set_postfix_str(status)

        self.logger.info("Genre pages updated successfully.")

    def print_summary(self):
        """Print sync summary."""
        if self.aborted:
            print("\n⚠️  Artist and genre folders must be set before updating genre pages")
            print("Set them with --artist-folder and --genre-folder")
            return

        print(f"\n📊 Genre Sync Summary:")
        print(f"🎤 Artist notes scanned: {self.stats['artist_notes']}")
        print(f"🏷️  Genres discovered: {self.stats['discovered']}")
        print(f"📁 Existing genre pages: {self.stats['genre_notes']}")
        if self.dry_run:
            print(f"🔍 Would create: {len(self.created_paths)} genre pages")
        else:
            print(f"✨ Created: {self.stats['created']} genre pages")
        if self.stats['skipped_existing'] > 0:
            print(f"⏭️  Skipped (page exists under sanitized name): {self.stats['skipped_existing']}")
        if self.stats['malformed'] > 0:
            print(f"⚠️  Artist notes with unreadable metadata: {self.stats['malformed']}")
        print(f"❌ Errors: {self.stats['errors']}")


def reconcile(config: GenreSyncSettings, storage, dry_run: bool = False) -> None:
    """Create the missing genre pages for one configuration and storage."""
    GenrePageSynchronizer(storage, dry_run=dry_run).reconcile(config)


def update_genre_pages(vault_dir: str, dry_run: bool = False) -> GenrePageSynchronizer:
    """Run the "Update Genre Pages" command against a vault on disk."""
    settings = SettingsStore(vault_dir).load()
    synchronizer = GenrePageSynchronizer(VaultStorage(vault_dir), dry_run=dry_run)
    synchronizer.reconcile(settings)
    return synchronizer


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Create missing genre pages from the genres of artist notes in an Obsidian vault"
    )

    parser.add_argument(
        '--vault',
        default=os.getenv('OBSIDIAN_VAULT', os.getcwd()),
        help='Path to the Obsidian vault (default: $OBSIDIAN_VAULT or current directory)'
    )
    parser.add_argument(
        '--artist-folder',
        help='Save the folder where artist notes are stored, then exit'
    )
    parser.add_argument(
        '--genre-folder',
        help='Save the folder where genre pages should be created, then exit'
    )
    parser.add_argument(
        '--show-settings',
        action='store_true',
        help='Print the saved folder settings and exit'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Preview genre pages without creating them'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='INFO',
        help='Set logging level (default: INFO)'
    )

    args = parser.parse_args()

    setup_logging(args.log_level)

    try:
        if not os.path.isdir(args.vault):
            print(f"❌ Error: Vault directory does not exist: {args.vault}")
            sys.exit(1)

        store = SettingsStore(args.vault)

        if args.artist_folder is not None or args.genre_folder is not None:
            settings = store.update(artist_folder=args.artist_folder, genre_folder=args.genre_folder)
            print(f"✅ Artist folder: {settings.artist_folder or '(not set)'}")
            print(f"✅ Genre folder: {settings.genre_folder or '(not set)'}")
            return

        if args.show_settings:
            settings = store.load()
            print(f"Artist folder: {settings.artist_folder or '(not set)'}")
            print(f"Genre folder: {settings.genre_folder or '(not set)'}")
            return

        print(f"\n🎵 Update Genre Pages")
        print(f"Vault: {args.vault}")
        if args.dry_run:
            print("🔍 DRY RUN MODE - No files will be created")
        print()

        synchronizer = update_genre_pages(args.vault, dry_run=args.dry_run)
        synchronizer.print_summary()

        if not synchronizer.aborted:
            print("\n✅ Genre pages updated successfully")

    except KeyboardInterrupt:
        print("\n\n⏹️  Process interrupted by user")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        print(f"\n❌ Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
