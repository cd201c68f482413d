"""Latest Strava activity widget: batch publisher and live endpoint."""
