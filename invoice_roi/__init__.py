"""Invoice automation ROI service."""
