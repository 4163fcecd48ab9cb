"""Standalone NiceGUI application for the genre bar chart."""
