"""Unit tests for size-based exclusion rules."""

from unittest.mock import patch

import pytest

from treedump.exclusion_rules.size_rules import SizeExclusionRules, parse_file_size


class TestParseFileSize:
    """Test the parse_file_size utility function."""

    def test_parse_bytes_only(self):
        """Test parsing raw byte values."""
        assert parse_file_size("1024") == 1024
        assert parse_file_size("0") == 0

    def test_parse_decimal_units(self):
        """Test parsing decimal units (KB, MB, GB)."""
        assert parse_file_size("1KB") == 1000
        assert parse_file_size("1MB") == 1000000
        assert parse_file_size("2.5MB") == 2500000
        assert parse_file_size("1 GB") == 1000000000

    def test_parse_binary_units(self):
        """Test parsing binary units (KiB, MiB)."""
        assert parse_file_size("1KiB") == 1024
        assert parse_file_size("1MiB") == 1048576

    def test_parse_invalid_format(self):
        """Test that invalid formats raise ValueError."""
        for value in ("invalid", "", "1XB"):
            with pytest.raises(ValueError, match="Invalid size format"):
                parse_file_size(value)


class TestSizeExclusionRules:
    """Test the SizeExclusionRules class."""

    def test_init_with_string(self):
        """Test initialization with human-readable size string."""
        assert SizeExclusionRules("1MB").max_size_bytes == 1000000

    def test_init_with_int(self):
        """Test initialization with integer bytes."""
        assert SizeExclusionRules(1048576).max_size_bytes == 1048576

    def test_init_rejects_negative(self):
        """Test that negative sizes are rejected."""
        with pytest.raises(ValueError, match="Size cannot be negative"):
            SizeExclusionRules(-1)

    @pytest.mark.parametrize("value", [1.5, None, True])
    def test_init_rejects_invalid_type(self, value):
        """Test that non-size types are rejected."""
        with pytest.raises(ValueError, match="max_size must be string or int"):
            SizeExclusionRules(value)

    def test_file_within_limit(self, tmp_path):
        """Test that files at or below the limit are kept."""
        (tmp_path / "exact.txt").write_bytes(b"x" * 10)
        rules = SizeExclusionRules(10)
        assert not rules.exclude(str(tmp_path / "exact.txt"))

    def test_file_exceeds_limit(self, tmp_path):
        """Test that files larger than the limit are excluded."""
        (tmp_path / "big.txt").write_bytes(b"x" * 11)
        rules = SizeExclusionRules(10)
        assert rules.exclude(str(tmp_path / "big.txt"))

    def test_relative_path_resolved_against_root(self, tmp_path):
        """Test that relative paths are joined to root_path."""
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "big.bin").write_bytes(b"x" * 100)

        rules = SizeExclusionRules(10, root_path=tmp_path)

        assert rules.exclude("sub/big.bin")
        assert not rules.exclude("sub/")

    def test_directory_never_excluded(self, tmp_path):
        """Test that directories are never excluded, even with a zero limit."""
        assert not SizeExclusionRules(0).exclude(str(tmp_path))

    def test_nonexistent_file_not_excluded(self, tmp_path):
        """Test that missing files are not excluded."""
        assert not SizeExclusionRules(1000).exclude(str(tmp_path / "missing.txt"))

    def test_stat_error_not_excluded(self):
        """Test that files whose size cannot be read are not excluded."""
        rules = SizeExclusionRules(1000)
        with patch("pathlib.Path.is_file", return_value=True):
            with patch("pathlib.Path.stat", side_effect=PermissionError()):
                assert not rules.exclude("/some/path")

    def test_has_rules(self):
        """Test the has_rules method."""
        assert SizeExclusionRules(1000).has_rules()
        assert not SizeExclusionRules(0).has_rules()

    def test_load_rules_not_supported(self, tmp_path):
        """Test that load_rules raises NotImplementedError."""
        rules_file = tmp_path / "sizes.txt"
        rules_file.write_text("500MB")
        with pytest.raises(NotImplementedError, match="SizeExclusionRules doesn't support loading rules from files"):
            SizeExclusionRules("1GB").load_rules(rules_file)

    def test_add_rule_not_supported(self):
        """Test that add_rule raises NotImplementedError."""
        with pytest.raises(NotImplementedError, match="SizeExclusionRules doesn't support adding individual rules"):
            SizeExclusionRules("1GB").add_rule("500MB")
