"""Application layer – feature flag registry and in-memory record store."""
