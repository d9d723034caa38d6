"""Gym membership directory API."""
