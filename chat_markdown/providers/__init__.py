"""Source-format parsing pipes and their registry."""
