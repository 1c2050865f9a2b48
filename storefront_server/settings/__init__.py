"""
Settings package for storefront_server.

Select an environment module with DJANGO_SETTINGS_MODULE, e.g.
storefront_server.settings.development or storefront_server.settings.production.
"""
