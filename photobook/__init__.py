# Photobook: automatic photo book layout

__version__ = "1.0.0"
