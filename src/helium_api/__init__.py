"""FastAPI application serving the Helium movie API."""
