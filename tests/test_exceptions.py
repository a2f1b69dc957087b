"""Tests for custom exceptions."""

from treedump.exceptions import WalkError


class TestWalkError:
    """Test WalkError exception."""

    def test_walk_error_with_cause(self):
        """Test creating WalkError with a path and an OS error."""
        cause = PermissionError(13, "Permission denied")
        error = WalkError("/srv/data", cause)

        assert error.path == "/srv/data"
        assert error.cause is cause
        assert str(error) == "Failed to walk /srv/data: [Errno 13] Permission denied"

    def test_walk_error_without_cause(self):
        """Test creating WalkError with only a path."""
        error = WalkError("/srv/data")

        assert error.cause is None
        assert str(error) == "Failed to walk /srv/data"

    def test_walk_error_is_not_an_os_error(self):
        """Test that WalkError is distinct from content read failures."""
        error = WalkError("/srv/data", FileNotFoundError(2, "No such file or directory"))

        assert isinstance(error, Exception)
        assert not isinstance(error, OSError)
