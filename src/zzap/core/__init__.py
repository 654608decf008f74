"""Build engine: page building, path resolution and the plugin lifecycle."""
