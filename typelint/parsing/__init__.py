"""Tree-sitter front end: syntax lowering, path resolution and layout estimates."""
