"""Default configuration for the Flask app.

Any key can be overridden with a SATSPLAN_ prefixed environment variable,
e.g. SATSPLAN_LOG_LEVEL=DEBUG or SATSPLAN_CORS_ORIGINS='["https://example.org"]'.
"""


class DefaultConfig:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]
    LOG_LEVEL = "INFO"
