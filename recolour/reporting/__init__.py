"""Read-only projections over the ticket store."""
