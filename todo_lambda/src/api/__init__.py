"""
Serverless Todo API package.

Importable as 'src.api'. The FastAPI application lives in 'src.api.main'
(``app``), together with the Lambda entrypoint ``handler``.
"""
