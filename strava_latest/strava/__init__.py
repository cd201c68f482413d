"""Strava integration package."""
