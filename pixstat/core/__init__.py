"""pixstat.core — Foundation layer.

Contains the pixel value type, error hierarchy, image loading, the
statistics engines, and the report renderers.
This module has NO dependency on the CLI in pixstat.__main__.
Only stdlib, numpy, and PIL are allowed here.
"""
