"""Unit tests.

Purpose
- Verify a single module/class/function in isolation.

Guidelines
- No real sleeps; inject `RecordingLatency` or a fake at the latency boundary.
- Prefer behavior-centric assertions over implementation details.
- Keep tests small, fast, and deterministic.
"""
