"""Player and team snapshots consumed by the engine."""
