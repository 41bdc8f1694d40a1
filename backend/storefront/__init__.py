"""
Flash Tans Storefront - catalog, checkout and order history backend
"""
__version__ = "1.0.0"
