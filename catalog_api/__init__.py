"""In-memory catalog store API: products and orders over HTTP."""
