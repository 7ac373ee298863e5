"""Graph layer: pins, node kinds, registry and the node graph itself."""
