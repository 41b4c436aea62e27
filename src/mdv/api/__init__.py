"""JSON and control API endpoints."""
