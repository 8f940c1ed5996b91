"""Test the word list loader."""

import pytest

from boggle.verifiers import Dictionary, check_word, set_default_dictionary


class TestDictionary:
    """Test membership and loading."""

    def test_membership_case_insensitive(self):
        """Words are stored and looked up in lowercase."""
        d = Dictionary(["Cat", "DOG"])
        assert d.contains("cat")
        assert d.contains("CAT")
        assert "dog" in d
        assert "cow" not in d

    def test_non_string_membership(self):
        """Only strings can be members."""
        assert 123 not in Dictionary(["cat"])

    def test_blank_entries_ignored(self):
        """Empty and whitespace entries are dropped."""
        d = Dictionary(["cat", "", "  ", "dog\n"])
        assert len(d) == 2
        assert "dog" in d

    def test_load(self, tmp_path):
        """One word per line, with blanks and comments skipped."""
        path = tmp_path / "words.txt"
        path.write_text("# word list\nCat\n\n  dog  \nGOATS\n")
        d = Dictionary.load(path)
        assert len(d) == 3
        assert "cat" in d
        assert "dog" in d
        assert "goats" in d
        assert "# word list" not in d

    def test_load_missing_file(self, tmp_path):
        """A missing word list raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            Dictionary.load(tmp_path / "nope.txt")


class TestCheckWord:
    """Test the module-level default dictionary."""

    def test_no_default(self):
        """Without a default dictionary nothing is a word."""
        set_default_dictionary(None)
        assert check_word("cat") is False

    def test_with_default(self):
        """The default dictionary answers membership."""
        set_default_dictionary(Dictionary(["cat"]))
        try:
            assert check_word("cat") is True
            assert check_word("dog") is False
        finally:
            set_default_dictionary(None)
