"""Application layer: the filesystem adapter built on the domain layer."""
