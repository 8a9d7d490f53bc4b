# ffmeta/services/schemas/plugin.py
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(BaseModel):
    status: Literal["healthy"] = "healthy"
    ready: bool
    version: str


class SchemaField(BaseModel):
    label: str
    type: str = "string"
    readonly: bool = True
    hint: Optional[str] = None


class PluginManifest(_CamelModel):
    id: str
    name: str
    version: str
    description: str
    author: str
    dependencies: List[str] = Field(default_factory=list)
    priority: int
    color: str
    default_queue: str
    timeout: int = Field(..., description="Milliseconds the dispatcher should allow per task")
    schema_: Dict[str, SchemaField] = Field(default_factory=dict, alias="schema")
    config: Dict[str, Any] = Field(default_factory=dict)


class ConfigureRequest(BaseModel):
    config: Dict[str, Any] = Field(default_factory=dict)


class ConfigureResponse(BaseModel):
    status: Literal["ok", "error"]
    error: Optional[str] = None


class ProcessRequest(_CamelModel):
    # All optional here so that missing fields produce a "rejected" reply
    # instead of a 422; see routers.process.
    task_id: Optional[str] = None
    cid: Optional[str] = None
    file_path: Optional[str] = None
    callback_url: Optional[str] = None
    meta_core_url: Optional[str] = None
    existing_meta: Optional[Dict[str, Any]] = None

    def missing_fields(self) -> List[str]:
        required = ("task_id", "cid", "file_path", "callback_url", "meta_core_url")
        return [to_camel(name) for name in required if not getattr(self, name)]


class ProcessResponse(BaseModel):
    status: Literal["accepted", "rejected"]
    error: Optional[str] = None
