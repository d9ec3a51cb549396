"""
Content-management backend for the clinic website.

This package provides a FastAPI application with database and media-host
abstractions so content can be edited from the admin dashboard and served
to the public site.
"""
