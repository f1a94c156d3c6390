"""Test doubles for external collaborators."""
