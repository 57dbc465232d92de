"""Route modules exposed by the API package."""

from . import photos, tickets, views

__all__ = ["photos", "tickets", "views"]
