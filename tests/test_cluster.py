import pytest

from atlaskube.cluster import (
    AtlasCluster,
    AtlasClusterList,
    AtlasClusterSpec,
    AutoScalingSpec,
    BiConnectorSpec,
    ClusterType,
    ComputeSpec,
    ProviderSettingsSpec,
    RegionsConfig,
    ReplicationSpec,
    default_aws_cluster,
    default_azure_cluster,
    default_gcp_cluster,
    new_cluster,
)
from atlaskube.common import LabelSpec, ObjectKey, ObjectMeta, ProviderName, ResourceRefNamespaced
from atlaskube.conditions import ConditionType, true_condition
from atlaskube.status import atlas_cluster_mongodb_version_option, atlas_cluster_state_name_option


def _full_spec() -> AtlasClusterSpec:
    return AtlasClusterSpec(
        project=ResourceRefNamespaced(name="proj", namespace="ns"),
        auto_scaling=AutoScalingSpec(
            auto_indexing_enabled=False,
            disk_gb_enabled=True,
            compute=ComputeSpec(
                enabled=True,
                scale_down_enabled=True,
                min_instance_size="M10",
                max_instance_size="M40",
            ),
        ),
        bi_connector=BiConnectorSpec(enabled=True, read_preference="secondary"),
        cluster_type=ClusterType.REPLICASET,
        disk_size_gb=10,
        encryption_at_rest_provider="AWS",
        labels=[LabelSpec(key="env", value="test")],
        mongodb_major_version="4.4",
        name="my-cluster",
        num_shards=1,
        paused=False,
        pit_enabled=True,
        provider_backup_enabled=True,
        provider_settings=ProviderSettingsSpec(
            backing_provider_name="AWS",
            disk_iops=100,
            disk_type_name="P4",
            encrypt_ebs_volume=True,
            instance_size_name="M10",
            provider_name=ProviderName.AWS,
            region_name="US_EAST_1",
            volume_type="STANDARD",
            auto_scaling=AutoScalingSpec(compute=ComputeSpec(max_instance_size="M20")),
        ),
        replication_specs=[
            ReplicationSpec(
                num_shards=1,
                zone_name="zone",
                regions_config={
                    "US_EAST_1": RegionsConfig(
                        analytics_nodes=0, electable_nodes=3, priority=7, read_only_nodes=0
                    )
                },
            )
        ],
    )


def test_enums():
    spec = AtlasClusterSpec(
        provider_settings=ProviderSettingsSpec(provider_name=ProviderName.AWS),
        cluster_type=ClusterType.GEOSHARDED,
    )
    assert spec.cluster() == {
        "providerSettings": {"providerName": "AWS"},
        "clusterType": "GEOSHARDED",
    }


def test_spec_field_names():
    assert sorted(_full_spec().to_dict()) == sorted(
        [
            "projectRef",
            "autoScaling",
            "biConnector",
            "clusterType",
            "diskSizeGB",
            "encryptionAtRestProvider",
            "labels",
            "mongoDBMajorVersion",
            "name",
            "numShards",
            "paused",
            "pitEnabled",
            "providerBackupEnabled",
            "providerSettings",
            "replicationSpecs",
        ]
    )


def test_nested_field_names():
    data = _full_spec().to_dict()
    assert sorted(data["providerSettings"]) == sorted(
        [
            "backingProviderName",
            "diskIOPS",
            "diskTypeName",
            "encryptEBSVolume",
            "instanceSizeName",
            "providerName",
            "regionName",
            "volumeType",
            "autoScaling",
        ]
    )
    assert sorted(data["autoScaling"]) == ["autoIndexingEnabled", "compute", "diskGBEnabled"]
    assert sorted(data["autoScaling"]["compute"]) == [
        "enabled",
        "maxInstanceSize",
        "minInstanceSize",
        "scaleDownEnabled",
    ]
    assert data["biConnector"] == {"enabled": True, "readPreference": "secondary"}
    assert data["replicationSpecs"][0]["regionsConfig"]["US_EAST_1"] == {
        "analyticsNodes": 0,
        "electableNodes": 3,
        "priority": 7,
        "readOnlyNodes": 0,
    }


def test_cluster_drops_project_ref():
    atlas = _full_spec().cluster()
    assert "projectRef" not in atlas
    assert atlas["name"] == "my-cluster"
    assert atlas["paused"] is False


def test_spec_round_trip():
    spec = _full_spec()
    assert AtlasClusterSpec.from_dict(spec.to_dict()) == spec


def test_new_cluster_defaults():
    cluster = new_cluster("ns", "k8s-name", "atlas-name")
    assert cluster.metadata == ObjectMeta(name="k8s-name", namespace="ns")
    assert cluster.spec.name == "atlas-name"
    assert cluster.spec.provider_settings.instance_size_name == "M10"
    assert cluster.spec.provider_settings.provider_name is None


@pytest.mark.parametrize(
    "factory, name, atlas_name, provider, region",
    [
        (default_gcp_cluster, "test-cluster-gcp-k8s", "test-cluster-gcp", ProviderName.GCP, "EASTERN_US"),
        (default_aws_cluster, "test-cluster-aws-k8s", "test-cluster-aws", ProviderName.AWS, "US_WEST_2"),
        (
            default_azure_cluster,
            "test-cluster-azure-k8s",
            "test-cluster-azure",
            ProviderName.AZURE,
            "EUROPE_NORTH",
        ),
    ],
)
def test_default_clusters(factory, name, atlas_name, provider, region):
    cluster = factory("ns", "my-project")
    assert cluster.metadata.name == name
    assert cluster.spec.name == atlas_name
    assert cluster.spec.project == ResourceRefNamespaced(name="my-project")
    assert cluster.spec.provider_settings.provider_name is provider
    assert cluster.spec.provider_settings.region_name == region


@pytest.mark.parametrize(
    "factory, backing, region",
    [
        (default_aws_cluster, "AWS", "US_EAST_1"),
        (default_azure_cluster, "AZURE", "US_EAST_2"),
        (default_gcp_cluster, "GCP", "CENTRAL_US"),
    ],
)
def test_lightweight(factory, backing, region):
    settings = factory("ns", "p").lightweight().spec.provider_settings
    assert settings.instance_size_name == "M2"
    assert settings.region_name == region
    assert settings.backing_provider_name == backing
    assert settings.provider_name is ProviderName.TENANT


def test_builders_return_self_and_set_fields():
    cluster = new_cluster("ns", "a", "b")
    result = cluster.with_name("x").with_atlas_name("y").with_instance_size("M30")
    assert result is cluster
    assert cluster.metadata.name == "x"
    assert cluster.spec.name == "y"
    assert cluster.spec.provider_settings.instance_size_name == "M30"


def test_with_provider_name_rejects_unknown():
    with pytest.raises(ValueError):
        new_cluster("ns", "a", "b").with_provider_name("NOPE")


def test_project_object_key_defaults_to_cluster_namespace():
    cluster = new_cluster("ns", "a", "b").with_project_name("proj")
    assert cluster.atlas_project_object_key() == ObjectKey(namespace="ns", name="proj")


def test_project_object_key_uses_reference_namespace():
    cluster = new_cluster("ns", "a", "b")
    cluster.spec.project = ResourceRefNamespaced(name="proj", namespace="other")
    assert cluster.atlas_project_object_key() == ObjectKey(namespace="other", name="proj")


def test_update_status():
    cluster = new_cluster("ns", "a", "b")
    cluster.metadata.generation = 4
    condition = true_condition(ConditionType.CLUSTER_READY)
    cluster.update_status(
        [condition],
        atlas_cluster_state_name_option("IDLE"),
        atlas_cluster_mongodb_version_option("4.4"),
    )
    assert cluster.status.conditions == [condition]
    assert cluster.status.observed_generation == 4
    assert cluster.status.state_name == "IDLE"
    assert cluster.status.mongodb_version == "4.4"


def test_update_status_rejects_bad_option():
    with pytest.raises(TypeError):
        new_cluster("ns", "a", "b").update_status([], "IDLE")


def test_cluster_list_to_dict():
    cluster = new_cluster("ns", "a", "b")
    data = AtlasClusterList(items=[cluster]).to_dict()
    assert len(data["items"]) == 1
    assert data["items"][0]["metadata"] == {"name": "a", "namespace": "ns"}
    assert data["items"][0]["spec"]["providerSettings"]["instanceSizeName"] == "M10"


def test_atlas_cluster_to_dict_spec():
    data = AtlasCluster(spec=AtlasClusterSpec(name="c")).to_dict()
    assert data["spec"]["name"] == "c"
    assert data["spec"]["providerSettings"] is None
    assert data["status"]["conditions"] == []