"""Command line interface for the Offboarding Engine."""
