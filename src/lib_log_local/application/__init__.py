"""Application layer: the local logger, its class registry, and ports."""
