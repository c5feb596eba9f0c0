"""Club management REST API."""
