"""PlayDeck - search and playlist companion for a remote music catalog and player."""

__version__ = "0.1.0"
