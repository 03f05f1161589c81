"""
Desktop Group Application resource for Citrix Virtual Apps and Desktops.

Ensures a named application is published in (or removed from) a desktop
delivery group using the desired-state contract:
- Get: read the current application record from the broker
- Test: compare desired parameters against the current record
- Set: create, update or remove the application so it matches
- Remote calls run under the caller's identity or alternate credentials
- ApplicationType is immutable once the application exists
"""

__version__ = "1.0.0"
