"""
Routers package - HTTP endpoints.

Modules:
- detectors.py - Detector adapter contract (recognize/train/remove/normalize)
"""
