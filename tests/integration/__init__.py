"""
Integration tests that run the real Blender.

These tests:
- Require Blender (BLENDER_PATH or `blender` on PATH)
- Take several seconds per conversion
- Are skipped when Blender is missing

Run with:
    pytest tests/integration/ -v
"""
