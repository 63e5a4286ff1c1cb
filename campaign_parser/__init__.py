"""Campaign notes entity extraction and duplicate resolution."""
