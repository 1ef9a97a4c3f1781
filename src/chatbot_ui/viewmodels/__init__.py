"""Headless view models feeding the Qt views."""
