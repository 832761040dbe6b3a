"""Integration tests.

Purpose
- Exercise the services as wired by `bootstrap`, with real (scaled) sleeps.

Guidelines
- Use realistic configuration via environment variables and monkeypatch.
- Minimize mocking; prefer the real adapters.
- Mark as 'integration' and keep them slower but reliable.
"""
