"""Transport-independent core: configuration, operations, envelopes and dispatch."""
