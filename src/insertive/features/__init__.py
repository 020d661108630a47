"""Snippet features: validation, templates, repository, menus, commands."""
