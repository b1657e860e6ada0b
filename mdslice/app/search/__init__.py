"""Offset and text queries over mdast trees."""
