"""Desktop platform integration."""
