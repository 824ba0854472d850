"""REST API for the Snapdi backend."""
