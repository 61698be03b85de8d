"""Screens of the GitGraph client."""
