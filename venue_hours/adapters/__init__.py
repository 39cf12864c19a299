"""Provider payload adapters."""
