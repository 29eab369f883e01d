"""
Catalog service middleware package.
Contains session resolution and error handling components.
"""
