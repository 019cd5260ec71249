# plancompare/__init__.py
"""
Direct vs Regular mutual fund plan comparison engine.

Replays lumpsum and SIP contributions against historical NAV series and
reports what the investor's plan choice cost or saved, with return and
risk statistics against an optional benchmark.
"""

__version__ = "1.0.0"
