"""WSGI entrypoint serving the reference-data client."""

from storefront.client.app import create_app

# Warm the resources every page shell renders (footer and partner marquee).
application = create_app(prefetch=("contact", "partners"))
