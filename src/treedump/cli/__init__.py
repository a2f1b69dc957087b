"""Command-line interface for treedump."""
