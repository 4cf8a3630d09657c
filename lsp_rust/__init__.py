"""
lsp-rust - Rust language server client adapter.

Bridges a text-editing host to one of two Rust analysis servers:
- RLS, with build/progress status aggregation
- rust-analyzer, with versioned source-change application

Launch commands, workspace roots and the configuration pushed at handshake
are resolved here; the protocol transport itself is supplied by the host.
"""

__version__ = "0.1.0"
