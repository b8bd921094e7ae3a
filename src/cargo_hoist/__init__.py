"""Memoize cargo-built binaries and hoist them into scope."""
