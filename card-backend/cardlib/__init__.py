"""Library package for card composition.

This package contains the pieces behind the ``/api/generate-card``
endpoint: settings, the asset directory helpers, the Pillow image
operations and the composer that ties them together. See individual
modules for details.
"""
