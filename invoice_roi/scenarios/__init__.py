"""Scenario module - saved ROI scenarios and their persistence."""
