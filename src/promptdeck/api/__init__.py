"""Promptdeck — FastAPI relay layer.

This package contains the FastAPI application, Pydantic request/response
models, the relay helpers and the error taxonomy.

Modules
-------
main
    FastAPI application with all route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request and response validation.
relay
    Body validation and system-turn injection.
errors
    Relay error taxonomy and its exception handler.
auth
    Caller identity dependency.
"""
