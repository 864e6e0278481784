"""Internal discovery and caching helpers. Not part of the public API."""
