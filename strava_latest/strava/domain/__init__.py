"""Pure Strava domain helpers with no I/O."""
