"""Flask application modules for the page rewriting service."""
