#!/usr/bin/env python3
"""
Genre Page Building Blocks

Pure helpers shared by the genre sync:
- Extract raw genre values from an artist note's frontmatter
- Normalize genre strings to their canonical (lowercase, trimmed) form
- Generate the filename and content of a missing genre page

Generated pages look like:

    ---
    chosicUrl: https://www.chosic.com/genre-chart/dream-pop/
    everynoiseUrl: https://everynoise.com/engenremap-dreampop.html
    ---

    ```dataview
    list
    from "Music/Artists"
    where contains(genres, "dream pop")
    ```
"""

import re
import logging
from collections import namedtuple
from typing import List, Dict, Optional, Any

from vault_storage import NOTE_EXTENSION

GENRES_FIELD = "genres"

CHOSIC_URL_TEMPLATE = "https://www.chosic.com/genre-chart/{slug}/"
EVERYNOISE_URL_TEMPLATE = "https://everynoise.com/engenremap-{compact}.html"

GENRE_PAGE_TEMPLATE = (
    "---\n"
    "chosicUrl: {chosic_url}\n"
    "everynoiseUrl: {everynoise_url}\n"
    "---\n"
    "\n"
    "```dataview\n"
    "list\n"
    "from \"{artist_folder}\"\n"
    "where contains(genres, \"{genre}\")\n"
    "```"
)

GeneratedContent = namedtuple('GeneratedContent', ['path', 'text'])

logger = logging.getLogger(__name__)


def _coerce_genre(value: Any) -> Optional[str]:
    """Coerce a single frontmatter value to a genre string, or None to skip it."""
    if isinstance(value, str):
        return value
    # YAML turns bare numbers and yes/no into int/float/bool
    if isinstance(value, (int, float)):
        return str(value)
    return None


def extract_genres(frontmatter: Optional[Dict[str, Any]]) -> List[str]:
    """
    Get the raw genre values declared in a note's frontmatter.

    Handles the three shapes the field takes in practice:
    - absent (or no frontmatter at all) -> []
    - a single value: "genres: Shoegaze" -> ["Shoegaze"]
    - a list: "genres: [Dream Pop, Shoegaze]" -> ["Dream Pop", "Shoegaze"]

    Numbers are coerced to strings; nulls, mappings and nested lists are skipped.
    """
    if not frontmatter:
        return []

    genres = frontmatter.get(GENRES_FIELD)
    if genres is None:
        return []

    if isinstance(genres, (list, tuple)):
        values = list(genres)
    else:
        values = [genres]

    result = []
    for value in values:
        genre = _coerce_genre(value)
        if genre is None:
            logger.debug(f"Skipping non-text genre value: {value!r}")
            continue
        result.append(genre)

    return result


def normalize_genre(raw: str) -> str:
    """Canonical genre form used for deduplication and matching."""
    return raw.lower().strip()


def sanitize_filename(genre: str) -> str:
    """Replace characters that are invalid in filenames with underscores."""
    return re.sub(r'[\\/:*?"<>|]', '_', genre)


def chosic_slug(genre: str) -> str:
    """Slug for chosic URLs: 'dream pop' -> 'dream-pop'."""
    return re.sub(r'\s+', '-', genre).lower()


def everynoise_compact(genre: str) -> str:
    """Compact key for everynoise URLs: 'r&b / soul' -> 'rbsoul'."""
    return re.sub(r'[^a-zA-Z0-9]', '', genre).lower()


def genre_page_path(genre: str, genre_folder: str) -> str:
    return f"{genre_folder}/{sanitize_filename(genre)}.{NOTE_EXTENSION}"


def generate_genre_page(genre: str, artist_folder: str, genre_folder: str) -> GeneratedContent:
    """
    Build the path and content for a genre page.

    Args:
        genre: Canonical genre name
        artist_folder: Normalized artist folder, queried by the dataview block
        genre_folder: Normalized folder the page is created in

    Returns:
        GeneratedContent(path, text)
    """
    text = GENRE_PAGE_TEMPLATE.format(
        chosic_url=CHOSIC_URL_TEMPLATE.format(slug=chosic_slug(genre)),
        everynoise_url=EVERYNOISE_URL_TEMPLATE.format(compact=everynoise_compact(genre)),
        artist_folder=artist_folder,
        genre=genre,
    )
    return GeneratedContent(genre_page_path(genre, genre_folder), text)
