"""
Services module for talking to the spoo.me API.

This module contains the clients and the response interpretation they share,
keeping HTTP handling separate from the request/response schemas.
"""
