"""Core engine: context snapshots, rule composition, registry and resolution."""
