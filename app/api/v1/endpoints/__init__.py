"""Endpoint modules of the v1 API, one router per resource."""
