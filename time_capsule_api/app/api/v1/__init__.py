"""
Version 1 of the API.

Breaking changes to the wire format belong in a new version
subpackage.
"""
