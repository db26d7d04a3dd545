"""Provider adapter implementations."""
