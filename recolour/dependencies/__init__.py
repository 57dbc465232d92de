"""FastAPI dependencies for role resolution and service access."""
