"""Customer registry admin backend."""
