"""Shared data-access layer for the Helium movie API."""
