"""Client-side building blocks for a block-based game protocol: worlds, chunks,
entities, block entities, mod-loader handshakes and session hashing."""

__version__ = "0.1.0"