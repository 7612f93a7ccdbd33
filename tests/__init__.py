"""Test package for the map clustering engine.

This package contains:
- Unit tests (test_geo.py, test_zoom_policy.py, test_clustering.py,
  test_viewport.py, test_session.py, test_catalog.py, test_config_loader.py)
- Test configuration (conftest.py)
"""
