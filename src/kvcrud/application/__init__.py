"""Application layer: ports that storage adapters implement."""
