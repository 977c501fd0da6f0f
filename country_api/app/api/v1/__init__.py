"""Version 1 of the Country API."""
