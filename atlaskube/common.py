"""Shared reference types, provider names and API group metadata."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class ProviderName(str, Enum):
    """Cloud service provider on which Atlas provisions hosts."""

    AWS = "AWS"
    GCP = "GCP"
    AZURE = "AZURE"
    TENANT = "TENANT"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with its version."""

    group: str
    version: str

    def __str__(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


GROUP_VERSION = GroupVersion(group="atlas.mongodb.com", version="v1")


@dataclass(frozen=True)
class ObjectKey:
    """Identifies a namespaced Kubernetes object."""

    namespace: str
    name: str


@dataclass
class ObjectMeta:
    """The subset of Kubernetes object metadata the resources rely on."""

    name: str = ""
    namespace: str = ""
    generation: int = 0

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.name:
            result["name"] = self.name
        if self.namespace:
            result["namespace"] = self.namespace
        if self.generation:
            result["generation"] = self.generation
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ObjectMeta:
        return cls(
            name=data.get("name", ""),
            namespace=data.get("namespace", ""),
            generation=int(data.get("generation", 0)),
        )


@dataclass(frozen=True)
class ResourceRef:
    """A reference to a Kubernetes resource by name."""

    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResourceRef:
        return cls(name=data.get("name", ""))


@dataclass(frozen=True)
class ResourceRefNamespaced:
    """A reference to a Kubernetes resource that may name its namespace."""

    name: str = ""
    namespace: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "namespace": self.namespace}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResourceRefNamespaced:
        return cls(name=data.get("name", ""), namespace=data.get("namespace", ""))


@dataclass(frozen=True)
class LabelSpec:
    """A key-value pair that tags a cluster or database user."""

    key: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "value": self.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LabelSpec:
        return cls(key=data.get("key", ""), value=data.get("value", ""))