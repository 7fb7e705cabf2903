"""
Common utilities for seed-phrase-manager.

Modules:
- words: slot word sanitizing and multi-slot paste distribution
- notifications: single-slot auto-dismissing toast channel
- supabase: async record store client (Supabase PostgREST)
- device: locally persisted device identifier
- qr: QR image export
- logging_config: process logging setup with phrase redaction
"""

__all__ = [
    "words",
    "notifications",
    "supabase",
    "device",
    "qr",
    "logging_config",
]
