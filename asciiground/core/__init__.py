"""Core rendering primitives for ASCIIGround.

Modules:
- types: character, region and per-frame context records
- region: character grid from surface and font metrics
- patterns: pattern generators and their registry
- backends: Pillow and OpenGL renderer backends
- coordinator: frame loop, redraw suppression and option edits
"""
