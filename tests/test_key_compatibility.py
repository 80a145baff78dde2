"""
Unit tests for key parsing and harmonic key compatibility.

Tests notation parsing, enharmonic folding, and the classification cascade.
"""

import pytest
from intune.analyze.key import (
    CIRCLE_OF_FIFTHS,
    Mode,
    MusicalKey,
    are_parallel_keys,
    are_relative_keys,
    calculate_key_compatibility,
    circle_distance,
    parse_key,
)


ALL_KEYS = list(CIRCLE_OF_FIFTHS)


class TestParseKey:
    """Test free-form key notation parsing."""

    def test_major_key(self):
        """'C Major' parses to C major at the top of the circle."""
        key = parse_key("C Major")
        assert key.is_valid is True
        assert key.root_note == "C"
        assert key.mode is Mode.MAJOR
        assert key.identity == "C"
        assert key.circle_position == 0

    def test_inline_minor_marker(self):
        """'Am' is A minor, not a note called 'Am'."""
        key = parse_key("Am")
        assert key.root_note == "A"
        assert key.mode is Mode.MINOR
        assert key.identity == "Am"
        assert key.circle_position == 0

    def test_sharp_key(self):
        """Sharps are kept as the root spelling."""
        key = parse_key("F# Major")
        assert key.root_note == "F#"
        assert key.mode is Mode.MAJOR
        assert key.circle_position == 6

    def test_flat_key_folds_to_sharp(self):
        """Flats are folded onto the sharp spelling."""
        key = parse_key("Bb Minor")
        assert key.is_valid is True
        assert key.root_note == "A#"
        assert key.identity == "A#m"
        assert key.mode is Mode.MINOR
        assert key.circle_position == 7

    def test_flat_with_inline_minor(self):
        """'Bbm' is B-flat minor, not B major."""
        assert parse_key("Bbm") == parse_key("Bb minor")

    def test_mode_abbreviations(self):
        """'maj' and 'min' normalise to major and minor."""
        assert parse_key("C maj").mode is Mode.MAJOR
        assert parse_key("A min").mode is Mode.MINOR
        assert parse_key("Cmaj").mode is Mode.MAJOR

    def test_mode_token_case_insensitive(self):
        """Mode tokens ignore case."""
        assert parse_key("C MAJOR") == parse_key("C major")
        assert parse_key("a minor").is_valid is False  # note must be uppercase
        assert parse_key("A MINOR").mode is Mode.MINOR

    def test_defaults_to_major(self):
        """No mode token means major."""
        assert parse_key("G").mode is Mode.MAJOR

    def test_whitespace(self):
        """Surrounding and inner whitespace is tolerated."""
        key = parse_key("  C  Major  ")
        assert key.is_valid is True
        assert key.identity == "C"

    def test_enharmonic_spellings_share_identity(self):
        """Gb/F# and Ebm/D#m are the same key."""
        assert parse_key("Gb") == parse_key("F#")
        assert parse_key("Ebm") == parse_key("D#m")
        assert parse_key("Ebm").circle_position == 6

    def test_rare_enharmonics(self):
        """Cb, Fb, E# and B# fold onto natural notes."""
        assert parse_key("Cb").root_note == "B"
        assert parse_key("Fb").root_note == "E"
        assert parse_key("E#").root_note == "F"
        assert parse_key("B#m").identity == "Cm"

    @pytest.mark.parametrize("value", ["", "   ", "Unknown", None, 120, "InvalidKey123", "H major", "C# dorian", "8B"])
    def test_invalid_input(self, value):
        """Sentinel, empty and malformed input are invalid."""
        key = parse_key(value)
        assert key.is_valid is False
        assert key.root_note is None
        assert key.mode is None
        assert key.circle_position is None
        assert key.identity is None

    def test_every_valid_key_has_position(self):
        """All 24 canonical keys sit on the circle."""
        for name in ALL_KEYS:
            assert parse_key(name).circle_position == CIRCLE_OF_FIFTHS[name]

    def test_identity_round_trip(self):
        """Re-parsing the canonical identity gives the same key."""
        for notation in ["C Major", "Am", "F# minor", "Bb min", "Db", "Ebm", "G maj", "Cb"]:
            key = parse_key(notation)
            assert parse_key(key.identity) == key

    def test_camelot_codes(self):
        """Camelot codes follow the standard wheel."""
        assert parse_key("C").camelot == "8B"
        assert parse_key("Am").camelot == "8A"
        assert parse_key("B").camelot == "1B"
        assert parse_key("Db").camelot == "3B"
        assert parse_key("Bbm").camelot == "3A"
        assert parse_key("F").camelot == "7B"
        assert parse_key("Unknown").camelot is None

    def test_str(self):
        """String form is readable."""
        assert str(parse_key("C")) == "C Major"
        assert str(parse_key("F#m")) == "F# Minor"
        assert str(parse_key("Unknown")) == "Unknown"


class TestCircleHelpers:
    """Test circle distance and relationship predicates."""

    def test_distance_wraps(self):
        """Distance takes the short way round."""
        assert circle_distance(0, 11) == 1
        assert circle_distance(1, 11) == 2
        assert circle_distance(0, 6) == 6
        assert circle_distance(3, 3) == 0

    def test_relative_either_order(self):
        """Relative check is order-independent."""
        assert are_relative_keys(parse_key("C"), parse_key("Am")) is True
        assert are_relative_keys(parse_key("Am"), parse_key("C")) is True
        assert are_relative_keys(parse_key("C"), parse_key("Em")) is False

    def test_parallel(self):
        """Parallel needs same root and different mode."""
        assert are_parallel_keys(parse_key("C"), parse_key("Cm")) is True
        assert are_parallel_keys(parse_key("C"), parse_key("C")) is False


class TestKeyCompatibility:
    """Test the key classification cascade."""

    def test_same_key(self):
        """Same key is a perfect match."""
        result = calculate_key_compatibility("C Major", "C Major")
        assert result.label == "perfect"
        assert result.score == 100
        assert result.reason == "Same key"

    def test_relative_keys(self):
        """C major and A minor are relative keys."""
        result = calculate_key_compatibility("C Major", "Am")
        assert result.label == "excellent"
        assert result.score == 95
        assert result.reason == "Relative major/minor keys"

    def test_relative_keys_g_e(self):
        """G major and E minor are relative keys."""
        result = calculate_key_compatibility("G Major", "Em")
        assert result.label == "excellent"
        assert result.score == 95

    def test_relative_keys_flat_spelling(self):
        """Db major and Bb minor are relative keys."""
        result = calculate_key_compatibility("Db", "Bbm")
        assert result.label == "excellent"

    def test_parallel_keys(self):
        """C major and C minor are parallel keys."""
        result = calculate_key_compatibility("C Major", "Cm")
        assert result.label == "very-good"
        assert result.score == 85
        assert result.reason == "Parallel major/minor keys"

    def test_adjacent_keys(self):
        """One fifth apart is a good match."""
        result = calculate_key_compatibility("C Major", "G Major")
        assert result.label == "good"
        assert result.score == 80
        assert result.reason == "Adjacent keys in circle of fifths"

        assert calculate_key_compatibility("C Major", "F Major").score == 80

    def test_adjacent_across_modes(self):
        """C major and E minor are one step apart."""
        assert calculate_key_compatibility("C", "Em").label == "good"

    def test_adjacent_wraps(self):
        """Dm (11) and Am (0) are adjacent."""
        assert calculate_key_compatibility("Dm", "Am").score == 80

    def test_two_steps(self):
        """Two fifths apart is fair."""
        result = calculate_key_compatibility("C Major", "D Major")
        assert result.label == "fair"
        assert result.score == 60
        assert result.reason == "Two steps apart in circle of fifths"

    def test_three_steps(self):
        """Three fifths apart is acceptable."""
        result = calculate_key_compatibility("C Major", "A Major")
        assert result.label == "acceptable"
        assert result.score == 40
        assert result.reason == "Three steps apart in circle of fifths"

    def test_unrelated(self):
        """The tritone is as far as it gets."""
        result = calculate_key_compatibility("C Major", "F# Major")
        assert result.label == "poor"
        assert result.score == 20
        assert result.reason == "Keys are not harmonically related"

    def test_enharmonic_same_key(self):
        """Gb and F# are the same key."""
        assert calculate_key_compatibility("Gb Major", "F# Major").label == "perfect"

    @pytest.mark.parametrize("key1,key2", [("Unknown", "C Major"), ("C Major", "Unknown"), ("Unknown", "Unknown"), ("", "Am"), (None, "Am")])
    def test_unknown(self, key1, key2):
        """Invalid key data scores zero."""
        result = calculate_key_compatibility(key1, key2)
        assert result.label == "unknown"
        assert result.score == 0
        assert result.reason == "Invalid key data"

    def test_accepts_parsed_keys(self):
        """MusicalKey instances are accepted as-is."""
        result = calculate_key_compatibility(parse_key("C"), parse_key("Am"))
        assert result.score == 95

    def test_same_key_always_perfect(self):
        """Every valid key is a perfect match with itself."""
        for name in ALL_KEYS:
            result = calculate_key_compatibility(name, name)
            assert (result.label, result.score) == ("perfect", 100)

    def test_symmetric(self):
        """Classification does not depend on argument order."""
        for key1 in ALL_KEYS:
            for key2 in ALL_KEYS:
                assert calculate_key_compatibility(key1, key2) == calculate_key_compatibility(key2, key1)

    def test_invalid_key_is_plain_value(self):
        """Invalid keys compare equal to each other."""
        assert parse_key("") == MusicalKey(root_note=None, mode=None, is_valid=False)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
