"""Pure domain services — total functions with no rendering dependency."""
