"""Adapters connecting the logger core to sinks, terminals and stdlib logging."""
