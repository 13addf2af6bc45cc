"""Core framework components for zmap_scanner."""
