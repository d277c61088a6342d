"""Core domain: models, encoding, flattening and the handler."""
