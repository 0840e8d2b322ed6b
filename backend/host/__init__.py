"""
Host environment seen by the layer switcher: the map surface and the page location.

Both are Protocols; StyleMap and MemoryLocation are the in-process implementations.
"""
