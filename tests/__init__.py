"""TESSERA test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Several components wired together, including real (scaled) sleeps.
- contract/     : Shared behavior/invariants enforced across multiple implementations.
- helpers/      : Shared utilities (no tests here).

General guidance
- Keep unit fast and deterministic; inject `RecordingLatency` instead of sleeping.
- Each test gets fresh service instances from fixtures; nothing is shared between tests.
- Contract parametrizes implementations to ensure consistent behavior.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
- Category markers: users, processing. Layer markers: unit, integration, contract, property, slow.
"""
