"""Portfolio API: content backend for a personal portfolio site."""
