"""Command line interface for shopdesk."""
