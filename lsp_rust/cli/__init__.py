"""lsp-rust command-line interface."""
