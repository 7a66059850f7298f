"""Internal modules for layerhttp.

Import from the top-level ``layerhttp`` package instead; layout here may change.

Modules:
    engine - Middleware composition and the middleware engine
    adapters - httpx-based transport adapters
    http - Shared httpx client configuration
    redaction - Credential redaction for debug output
"""
