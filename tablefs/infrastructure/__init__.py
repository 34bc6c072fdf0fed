"""Infrastructure adapters (database backends) for tablefs."""
