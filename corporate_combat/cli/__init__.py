"""Terminal front end for Corporate Combat."""
