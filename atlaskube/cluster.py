"""The AtlasCluster custom resource: its specification, builders and status handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Mapping

from atlaskube.common import (
    LabelSpec,
    ObjectKey,
    ObjectMeta,
    ProviderName,
    ResourceRefNamespaced,
)
from atlaskube.conditions import Condition
from atlaskube.status import AtlasClusterStatus


class ClusterType(str, Enum):
    """Topology of an Atlas cluster."""

    REPLICASET = "REPLICASET"
    SHARDED = "SHARDED"
    GEOSHARDED = "GEOSHARDED"

    def __str__(self) -> str:
        return self.value


def _put(target: dict[str, Any], key: str, value: Any) -> None:
    """Store ``value`` under ``key`` unless it is None or an empty string or collection."""
    if value is None:
        return
    if isinstance(value, (str, list, dict)) and not value:
        return
    target[key] = value


def _prune(value: Any) -> Any:
    """Drop empty strings and None values from nested mappings."""
    if isinstance(value, dict):
        return {
            key: _prune(item)
            for key, item in value.items()
            if item is not None and item != ""
        }
    if isinstance(value, list):
        return [_prune(item) for item in value]
    return value


def _opt_int(data: Mapping[str, Any], key: str) -> int | None:
    value = data.get(key)
    return None if value is None else int(value)


def _opt_bool(data: Mapping[str, Any], key: str) -> bool | None:
    value = data.get(key)
    return None if value is None else bool(value)


@dataclass
class ComputeSpec:
    """Whether a cluster scales its tier automatically, and within which bounds."""

    enabled: bool | None = None
    scale_down_enabled: bool | None = None
    min_instance_size: str = ""
    max_instance_size: str = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        _put(result, "enabled", self.enabled)
        _put(result, "scaleDownEnabled", self.scale_down_enabled)
        _put(result, "minInstanceSize", self.min_instance_size)
        _put(result, "maxInstanceSize", self.max_instance_size)
        return result


def _compute_from_dict(data: Mapping[str, Any]) -> ComputeSpec:
    return ComputeSpec(
        enabled=_opt_bool(data, "enabled"),
        scale_down_enabled=_opt_bool(data, "scaleDownEnabled"),
        min_instance_size=data.get("minInstanceSize") or "",
        max_instance_size=data.get("maxInstanceSize") or "",
    )


@dataclass
class AutoScalingSpec:
    """Auto-scaling configuration of a cluster."""

    auto_indexing_enabled: bool | None = None
    disk_gb_enabled: bool | None = None
    compute: ComputeSpec | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        _put(result, "autoIndexingEnabled", self.auto_indexing_enabled)
        _put(result, "diskGBEnabled", self.disk_gb_enabled)
        if self.compute is not None:
            result["compute"] = self.compute.to_dict()
        return result


def _auto_scaling_from_dict(data: Mapping[str, Any] | None) -> AutoScalingSpec | None:
    if data is None:
        return None
    compute = data.get("compute")
    return AutoScalingSpec(
        auto_indexing_enabled=_opt_bool(data, "autoIndexingEnabled"),
        disk_gb_enabled=_opt_bool(data, "diskGBEnabled"),
        compute=None if compute is None else _compute_from_dict(compute),
    )


@dataclass
class BiConnectorSpec:
    """BI Connector for Atlas configuration of a cluster."""

    enabled: bool | None = None
    read_preference: str = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        _put(result, "enabled", self.enabled)
        _put(result, "readPreference", self.read_preference)
        return result


@dataclass
class ProviderSettingsSpec:
    """Configuration of the hosts on which MongoDB runs, specific to the cloud provider."""

    backing_provider_name: str = ""
    disk_iops: int | None = None
    disk_type_name: str = ""
    encrypt_ebs_volume: bool | None = None
    instance_size_name: str = ""
    provider_name: ProviderName | None = None
    region_name: str = ""
    volume_type: str = ""
    auto_scaling: AutoScalingSpec | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        _put(result, "backingProviderName", self.backing_provider_name)
        _put(result, "diskIOPS", self.disk_iops)
        _put(result, "diskTypeName", self.disk_type_name)
        _put(result, "encryptEBSVolume", self.encrypt_ebs_volume)
        result["instanceSizeName"] = self.instance_size_name
        result["providerName"] = self.provider_name.value if self.provider_name else ""
        _put(result, "regionName", self.region_name)
        _put(result, "volumeType", self.volume_type)
        if self.auto_scaling is not None:
            result["autoScaling"] = self.auto_scaling.to_dict()
        return result


def _provider_settings_from_dict(
    data: Mapping[str, Any] | None,
) -> ProviderSettingsSpec | None:
    if data is None:
        return None
    provider = data.get("providerName")
    return ProviderSettingsSpec(
        backing_provider_name=data.get("backingProviderName") or "",
        disk_iops=_opt_int(data, "diskIOPS"),
        disk_type_name=data.get("diskTypeName") or "",
        encrypt_ebs_volume=_opt_bool(data, "encryptEBSVolume"),
        instance_size_name=data.get("instanceSizeName") or "",
        provider_name=ProviderName(provider) if provider else None,
        region_name=data.get("regionName") or "",
        volume_type=data.get("volumeType") or "",
        auto_scaling=_auto_scaling_from_dict(data.get("autoScaling")),
    )


@dataclass
class RegionsConfig:
    """A region's election priority and the number and kind of nodes deployed to it."""

    analytics_nodes: int | None = None
    electable_nodes: int | None = None
    priority: int | None = None
    read_only_nodes: int | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        _put(result, "analyticsNodes", self.analytics_nodes)
        _put(result, "electableNodes", self.electable_nodes)
        _put(result, "priority", self.priority)
        _put(result, "readOnlyNodes", self.read_only_nodes)
        return result


def _regions_config_from_dict(data: Mapping[str, Any]) -> RegionsConfig:
    return RegionsConfig(
        analytics_nodes=_opt_int(data, "analyticsNodes"),
        electable_nodes=_opt_int(data, "electableNodes"),
        priority=_opt_int(data, "priority"),
        read_only_nodes=_opt_int(data, "readOnlyNodes"),
    )


@dataclass
class ReplicationSpec:
    """Configuration of the regions of one zone of a cluster."""

    num_shards: int | None = None
    zone_name: str = ""
    regions_config: dict[str, RegionsConfig] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        _put(result, "numShards", self.num_shards)
        _put(result, "zoneName", self.zone_name)
        _put(
            result,
            "regionsConfig",
            {region: config.to_dict() for region, config in self.regions_config.items()},
        )
        return result


def _replication_spec_from_dict(data: Mapping[str, Any]) -> ReplicationSpec:
    return ReplicationSpec(
        num_shards=_opt_int(data, "numShards"),
        zone_name=data.get("zoneName") or "",
        regions_config={
            region: _regions_config_from_dict(config)
            for region, config in (data.get("regionsConfig") or {}).items()
        },
    )


@dataclass
class AtlasClusterSpec:
    """Desired state of an AtlasCluster."""

    project: ResourceRefNamespaced = field(default_factory=ResourceRefNamespaced)
    auto_scaling: AutoScalingSpec | None = None
    bi_connector: BiConnectorSpec | None = None
    cluster_type: ClusterType | None = None
    disk_size_gb: int | None = None
    encryption_at_rest_provider: str = ""
    labels: list[LabelSpec] = field(default_factory=list)
    mongodb_major_version: str = ""
    name: str = ""
    num_shards: int | None = None
    paused: bool | None = None
    pit_enabled: bool | None = None
    provider_backup_enabled: bool | None = None
    provider_settings: ProviderSettingsSpec | None = None
    replication_specs: list[ReplicationSpec] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"projectRef": self.project.to_dict()}
        if self.auto_scaling is not None:
            result["autoScaling"] = self.auto_scaling.to_dict()
        if self.bi_connector is not None:
            result["biConnector"] = self.bi_connector.to_dict()
        _put(result, "clusterType", self.cluster_type.value if self.cluster_type else None)
        _put(result, "diskSizeGB", self.disk_size_gb)
        _put(result, "encryptionAtRestProvider", self.encryption_at_rest_provider)
        _put(result, "labels", [label.to_dict() for label in self.labels])
        _put(result, "mongoDBMajorVersion", self.mongodb_major_version)
        result["name"] = self.name
        _put(result, "numShards", self.num_shards)
        _put(result, "paused", self.paused)
        _put(result, "pitEnabled", self.pit_enabled)
        _put(result, "providerBackupEnabled", self.provider_backup_enabled)
        result["providerSettings"] = (
            self.provider_settings.to_dict() if self.provider_settings is not None else None
        )
        _put(
            result,
            "replicationSpecs",
            [spec.to_dict() for spec in self.replication_specs],
        )
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AtlasClusterSpec:
        bi_connector = data.get("biConnector")
        cluster_type = data.get("clusterType")
        return cls(
            project=ResourceRefNamespaced.from_dict(data.get("projectRef") or {}),
            auto_scaling=_auto_scaling_from_dict(data.get("autoScaling")),
            bi_connector=(
                None
                if bi_connector is None
                else BiConnectorSpec(
                    enabled=_opt_bool(bi_connector, "enabled"),
                    read_preference=bi_connector.get("readPreference") or "",
                )
            ),
            cluster_type=ClusterType(cluster_type) if cluster_type else None,
            disk_size_gb=_opt_int(data, "diskSizeGB"),
            encryption_at_rest_provider=data.get("encryptionAtRestProvider") or "",
            labels=[LabelSpec.from_dict(item) for item in data.get("labels") or []],
            mongodb_major_version=data.get("mongoDBMajorVersion") or "",
            name=data.get("name") or "",
            num_shards=_opt_int(data, "numShards"),
            paused=_opt_bool(data, "paused"),
            pit_enabled=_opt_bool(data, "pitEnabled"),
            provider_backup_enabled=_opt_bool(data, "providerBackupEnabled"),
            provider_settings=_provider_settings_from_dict(data.get("providerSettings")),
            replication_specs=[
                _replication_spec_from_dict(item) for item in data.get("replicationSpecs") or []
            ],
        )

    def cluster(self) -> dict[str, Any]:
        """Return the specification in the format the Atlas API accepts."""
        result = self.to_dict()
        del result["projectRef"]
        return _prune(result)


StatusOption = Callable[[AtlasClusterStatus], None]


@dataclass
class AtlasCluster:
    """The AtlasCluster custom resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: AtlasClusterSpec = field(default_factory=AtlasClusterSpec)
    status: AtlasClusterStatus = field(default_factory=AtlasClusterStatus)

    def _settings(self) -> ProviderSettingsSpec:
        if self.spec.provider_settings is None:
            self.spec.provider_settings = ProviderSettingsSpec()
        return self.spec.provider_settings

    def atlas_project_object_key(self) -> ObjectKey:
        """Return the key of the AtlasProject; it defaults to the cluster's namespace."""
        namespace = self.spec.project.namespace or self.metadata.namespace
        return ObjectKey(namespace=namespace, name=self.spec.project.name)

    def update_status(self, conditions: Iterable[Condition], *args: StatusOption) -> None:
        """Replace the conditions, record the observed generation and apply the options."""
        self.status.conditions = list(conditions)
        self.status.observed_generation = self.metadata.generation
        for option in args:
            if not callable(option):
                raise TypeError(f"not an AtlasCluster status option: {option!r}")
            option(self.status)

    def with_name(self, name: str) -> AtlasCluster:
        self.metadata.name = name
        return self

    def with_atlas_name(self, name: str) -> AtlasCluster:
        self.spec.name = name
        return self

    def with_project_name(self, project_name: str) -> AtlasCluster:
        self.spec.project = ResourceRefNamespaced(name=project_name)
        return self

    def with_provider_name(self, name: ProviderName | str) -> AtlasCluster:
        self._settings().provider_name = ProviderName(name)
        return self

    def with_region_name(self, name: str) -> AtlasCluster:
        self._settings().region_name = name
        return self

    def with_instance_size(self, name: str) -> AtlasCluster:
        self._settings().instance_size_name = name
        return self

    def with_backing_provider(self, name: str) -> AtlasCluster:
        self._settings().backing_provider_name = name
        return self

    def lightweight(self) -> AtlasCluster:
        """Switch the cluster to a shared M2 instance in a region that supports it."""
        self.with_instance_size("M2")
        settings = self._settings()
        region = {
            ProviderName.AWS: "US_EAST_1",
            ProviderName.AZURE: "US_EAST_2",
            ProviderName.GCP: "CENTRAL_US",
        }.get(settings.provider_name)
        if region is not None:
            self.with_region_name(region)
        self.with_backing_provider(settings.provider_name.value if settings.provider_name else "")
        self.with_provider_name(ProviderName.TENANT)
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict(),
            "spec": self.spec.to_dict(),
            "status": self.status.to_dict(),
        }


@dataclass
class AtlasClusterList:
    """A list of AtlasCluster resources."""

    items: list[AtlasCluster] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"metadata": {}, "items": [item.to_dict() for item in self.items]}


def new_cluster(namespace: str, name: str, name_in_atlas: str) -> AtlasCluster:
    """Return a cluster resource with an M10 instance size."""
    return AtlasCluster(
        metadata=ObjectMeta(name=name, namespace=namespace),
        spec=AtlasClusterSpec(
            name=name_in_atlas,
            provider_settings=ProviderSettingsSpec(instance_size_name="M10"),
        ),
    )


def default_gcp_cluster(namespace: str, project_name: str) -> AtlasCluster:
    return (
        new_cluster(namespace, "test-cluster-gcp-k8s", "test-cluster-gcp")
        .with_project_name(project_name)
        .with_provider_name(ProviderName.GCP)
        .with_region_name("EASTERN_US")
    )


def default_aws_cluster(namespace: str, project_name: str) -> AtlasCluster:
    return (
        new_cluster(namespace, "test-cluster-aws-k8s", "test-cluster-aws")
        .with_project_name(project_name)
        .with_provider_name(ProviderName.AWS)
        .with_region_name("US_WEST_2")
    )


def default_azure_cluster(namespace: str, project_name: str) -> AtlasCluster:
    return (
        new_cluster(namespace, "test-cluster-azure-k8s", "test-cluster-azure")
        .with_project_name(project_name)
        .with_provider_name(ProviderName.AZURE)
        .with_region_name("EUROPE_NORTH")
    )