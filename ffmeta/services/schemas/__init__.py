from ffmeta.services.schemas.plugin import (
    ConfigureRequest,
    ConfigureResponse,
    HealthResponse,
    PluginManifest,
    ProcessRequest,
    ProcessResponse,
    SchemaField,
)

__all__ = [
    "ConfigureRequest",
    "ConfigureResponse",
    "HealthResponse",
    "PluginManifest",
    "ProcessRequest",
    "ProcessResponse",
    "SchemaField",
]
