"""Widgets of the GitGraph client."""
