# ==============================================
# TOPIC 4: FIXTURES
# ==============================================
#
# This package loads YAML fixture files into the
# database and keeps the inserted rows addressable by name.
#
# Modules:
# --------
# - fixture_loader.py  → Fixture, FixtureError
#
# ==============================================

from .fixture_loader import Fixture, FixtureError

__all__ = ["Fixture", "FixtureError"]
