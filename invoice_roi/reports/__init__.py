"""Report module - email-gated scenario snapshots."""
