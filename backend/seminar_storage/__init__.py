"""Centralized storage for files uploaded by seminar presenters."""
