"""
catalog_dashboard - Ürün kataloğu yönetim paneli.
"""
__version__ = "0.1.0"
