"""JSON dashboard API."""
