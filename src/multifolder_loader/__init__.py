"""Discover mods spread over several configured base folders."""
