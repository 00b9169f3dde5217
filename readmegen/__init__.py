"""
readmegen - README generation from a project's structure and manifests.

Detects a project's ecosystem (Node.js, Python, Go or Rust), extracts
metadata from its manifest, and renders a README from one of four template
tiers.
"""

__version__ = "1.0.0"
