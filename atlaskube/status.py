"""Observed state of the Atlas custom resources and the options that update it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping

from atlaskube.common import ProviderName
from atlaskube.conditions import Condition
from atlaskube.project import IPAccessList


def _put(target: dict[str, Any], key: str, value: Any) -> None:
    """Store ``value`` under ``key`` unless it is empty."""
    if value:
        target[key] = value


@dataclass
class Common:
    """Status fields shared by every Atlas custom resource."""

    conditions: list[Condition] = field(default_factory=list)
    observed_generation: int = 0

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "conditions": [condition.to_dict() for condition in self.conditions]
        }
        _put(result, "observedGeneration", self.observed_generation)
        return result


@dataclass
class Endpoint:
    """A private endpoint through which a cluster is reached."""

    endpoint_id: str = ""
    provider_name: str = ""
    region: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Endpoint:
        return cls(
            endpoint_id=data.get("endpointId") or "",
            provider_name=data.get("providerName") or "",
            region=data.get("region") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        _put(result, "endpointId", self.endpoint_id)
        _put(result, "providerName", self.provider_name)
        _put(result, "region", self.region)
        return result


@dataclass
class PrivateEndpoint:
    """Connection strings for reaching a cluster through a private endpoint."""

    connection_string: str = ""
    endpoints: list[Endpoint] = field(default_factory=list)
    srv_connection_string: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PrivateEndpoint:
        return cls(
            connection_string=data.get("connectionString") or "",
            endpoints=[Endpoint.from_dict(item) for item in data.get("endpoints") or []],
            srv_connection_string=data.get("srvConnectionString") or "",
            type=data.get("type") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        _put(result, "connectionString", self.connection_string)
        _put(result, "endpoints", [endpoint.to_dict() for endpoint in self.endpoints])
        _put(result, "srvConnectionString", self.srv_connection_string)
        _put(result, "type", self.type)
        return result


@dataclass
class ConnectionStrings:
    """The connection strings applications use to reach a cluster."""

    standard: str = ""
    standard_srv: str = ""
    private_endpoint: list[PrivateEndpoint] = field(default_factory=list)
    private: str = ""
    private_srv: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConnectionStrings:
        """Build from the Atlas representation; unknown keys are ignored."""
        return cls(
            standard=data.get("standard") or "",
            standard_srv=data.get("standardSrv") or "",
            private_endpoint=[
                PrivateEndpoint.from_dict(item) for item in data.get("privateEndpoint") or []
            ],
            private=data.get("private") or "",
            private_srv=data.get("privateSrv") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        _put(result, "standard", self.standard)
        _put(result, "standardSrv", self.standard_srv)
        _put(
            result,
            "privateEndpoint",
            [endpoint.to_dict() for endpoint in self.private_endpoint],
        )
        _put(result, "private", self.private)
        _put(result, "privateSrv", self.private_srv)
        return result


@dataclass
class AtlasClusterStatus(Common):
    """Observed state of an AtlasCluster."""

    state_name: str = ""
    mongodb_version: str = ""
    connection_strings: ConnectionStrings | None = None
    mongo_uri_updated: str = ""

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        _put(result, "stateName", self.state_name)
        _put(result, "mongoDBVersion", self.mongodb_version)
        if self.connection_strings is not None:
            result["connectionStrings"] = self.connection_strings.to_dict()
        _put(result, "mongoURIUpdated", self.mongo_uri_updated)
        return result


@dataclass
class AtlasDatabaseUserStatus(Common):
    """Observed state of an AtlasDatabaseUser."""

    password_version: str = ""
    user_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        _put(result, "passwordVersion", self.password_version)
        _put(result, "name", self.user_name)
        return result


@dataclass
class AtlasProjectStatus(Common):
    """Observed state of an AtlasProject."""

    id: str = ""
    expired_ip_access_list: list[IPAccessList] = field(default_factory=list)
    private_endpoints: list[PrivateEndpoint] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        _put(result, "id", self.id)
        _put(
            result,
            "expiredIpAccessList",
            [entry.to_atlas() for entry in self.expired_ip_access_list],
        )
        _put(
            result,
            "privateEndpoints",
            [endpoint.to_dict() for endpoint in self.private_endpoints],
        )
        return result


@dataclass
class ProjectPrivateEndpoint:
    """A private endpoint service that Atlas manages for a project."""

    provider: ProviderName
    region: str
    service_name: str = ""
    service_resource_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"provider": self.provider.value, "region": self.region}
        _put(result, "serviceName", self.service_name)
        _put(result, "serviceResourceId", self.service_resource_id)
        return result


AtlasClusterStatusOption = Callable[[AtlasClusterStatus], None]
AtlasDatabaseUserStatusOption = Callable[[AtlasDatabaseUserStatus], None]
AtlasProjectStatusOption = Callable[[AtlasProjectStatus], None]


def atlas_cluster_state_name_option(state_name: str) -> AtlasClusterStatusOption:
    def apply(status: AtlasClusterStatus) -> None:
        status.state_name = state_name

    return apply


def atlas_cluster_mongodb_version_option(mongodb_version: str) -> AtlasClusterStatusOption:
    def apply(status: AtlasClusterStatus) -> None:
        status.mongodb_version = mongodb_version

    return apply


def atlas_cluster_connection_strings_option(
    connection_strings: Mapping[str, Any] | ConnectionStrings | None,
) -> AtlasClusterStatusOption:
    """Set the connection strings from their Atlas form.

    Data that cannot be read leaves the status unchanged.
    """

    def apply(status: AtlasClusterStatus) -> None:
        if isinstance(connection_strings, ConnectionStrings):
            source: Mapping[str, Any] = connection_strings.to_dict()
        else:
            source = connection_strings or {}
        try:
            parsed = ConnectionStrings.from_dict(source)
        except (AttributeError, TypeError, ValueError):
            return
        status.connection_strings = parsed

    return apply


def atlas_cluster_mongo_uri_updated_option(mongo_uri_updated: str) -> AtlasClusterStatusOption:
    def apply(status: AtlasClusterStatus) -> None:
        status.mongo_uri_updated = mongo_uri_updated

    return apply


def atlas_database_user_password_version(password_version: str) -> AtlasDatabaseUserStatusOption:
    def apply(status: AtlasDatabaseUserStatus) -> None:
        status.password_version = password_version

    return apply


def atlas_database_user_name_option(name: str) -> AtlasDatabaseUserStatusOption:
    def apply(status: AtlasDatabaseUserStatus) -> None:
        status.user_name = name

    return apply


def atlas_project_id_option(project_id: str) -> AtlasProjectStatusOption:
    def apply(status: AtlasProjectStatus) -> None:
        status.id = project_id

    return apply


def atlas_project_expired_ip_access_option(
    lists: Iterable[IPAccessList],
) -> AtlasProjectStatusOption:
    entries = list(lists)

    def apply(status: AtlasProjectStatus) -> None:
        status.expired_ip_access_list = list(entries)

    return apply