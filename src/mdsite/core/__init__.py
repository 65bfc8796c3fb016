"""Path resolution, content loading and template rendering."""
