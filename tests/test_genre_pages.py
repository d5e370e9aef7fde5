"""Tests for genre extraction, normalization and page generation."""

import pytest

from genre_pages import (
    GeneratedContent,
    chosic_slug,
    everynoise_compact,
    extract_genres,
    generate_genre_page,
    normalize_genre,
    sanitize_filename,
)


class TestExtractGenres:
    """Test reading the genres field in its different shapes."""

    def test_no_frontmatter(self):
        assert extract_genres(None) == []
        assert extract_genres({}) == []

    def test_field_absent(self):
        assert extract_genres({"title": "Slowdive"}) == []

    def test_field_null(self):
        assert extract_genres({"genres": None}) == []

    def test_single_string(self):
        assert extract_genres({"genres": "Dream Pop"}) == ["Dream Pop"]

    def test_list_returned_in_order(self):
        assert extract_genres({"genres": ["Dream Pop", "shoegaze"]}) == ["Dream Pop", "shoegaze"]

    def test_numbers_are_coerced(self):
        """YAML parses bare numbers, so "genres: [2 tone]" style values survive."""
        assert extract_genres({"genres": ["jazz", 2010, 1.5]}) == ["jazz", "2010", "1.5"]
        assert extract_genres({"genres": 1990}) == ["1990"]

    def test_unsupported_values_skipped(self):
        frontmatter = {"genres": ["jazz", None, {"name": "funk"}, ["soul"]]}
        assert extract_genres(frontmatter) == ["jazz"]

    def test_mapping_value_contributes_nothing(self):
        assert extract_genres({"genres": {"primary": "jazz"}}) == []


class TestNormalizeGenre:
    """Test canonical genre form."""

    @pytest.mark.parametrize("raw", ["Synth-Pop", " synth-pop", "SYNTH-POP", "synth-pop  \n"])
    def test_case_and_whitespace_insensitive(self, raw):
        assert normalize_genre(raw) == "synth-pop"

    @pytest.mark.parametrize("raw", ["  Dream Pop ", "R&B", "ac/dc", "", "   "])
    def test_idempotent(self, raw):
        assert normalize_genre(normalize_genre(raw)) == normalize_genre(raw)

    def test_inner_whitespace_kept(self):
        assert normalize_genre("  Dream   Pop ") == "dream   pop"


class TestUrlKeys:
    """Test the chosic slug and everynoise compact forms."""

    def test_chosic_slug(self):
        assert chosic_slug("dream pop") == "dream-pop"
        assert chosic_slug("new   wave\tof british") == "new-wave-of-british"
        assert chosic_slug("Dream Pop") == "dream-pop"

    def test_everynoise_compact(self):
        assert everynoise_compact("dream pop") == "dreampop"
        assert everynoise_compact("r&b / soul") == "rbsoul"
        assert everynoise_compact("K-Pop") == "kpop"
        assert everynoise_compact("música popular") == "msicapopular"


class TestSanitizeFilename:
    """Test filename safety."""

    def test_invalid_characters_replaced(self):
        assert sanitize_filename('a\\b/c:d*e?f"g<h>i|j') == "a_b_c_d_e_f_g_h_i_j"

    def test_plain_genre_unchanged(self):
        assert sanitize_filename("dream pop") == "dream pop"

    @pytest.mark.parametrize("genre", ["ac/dc", "what?", "<drone>", 'the "new" thing', "c:\\music|x*"])
    def test_generated_filename_is_safe(self, genre):
        path = generate_genre_page(genre, "Artists", "Genres").path
        filename = path.rsplit("/", 1)[-1]
        assert not any(ch in filename for ch in '\\/:*?"<>|')


class TestGenerateGenrePage:
    """Test the generated genre page."""

    def test_exact_content(self):
        page = generate_genre_page("dream pop", "Music/Artists", "Music/Genres")

        assert isinstance(page, GeneratedContent)
        assert page.path == "Music/Genres/dream pop.md"
        assert page.text == (
            "---\n"
            "chosicUrl: https://www.chosic.com/genre-chart/dream-pop/\n"
            "everynoiseUrl: https://everynoise.com/engenremap-dreampop.html\n"
            "---\n"
            "\n"
            "```dataview\n"
            "list\n"
            "from \"Music/Artists\"\n"
            "where contains(genres, \"dream pop\")\n"
            "```"
        )

    def test_query_uses_unescaped_genre(self):
        page = generate_genre_page("ac/dc", "Artists", "Genres")

        assert page.path == "Genres/ac_dc.md"
        assert 'where contains(genres, "ac/dc")' in page.text
        assert "engenremap-acdc.html" in page.text
        assert "genre-chart/ac/dc/" in page.text

    def test_deterministic(self):
        first = generate_genre_page("shoegaze", "Artists", "Genres")
        second = generate_genre_page("shoegaze", "Artists", "Genres")
        assert first == second
