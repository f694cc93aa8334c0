"""Diagnostics API - views over the teacher data layer."""
