# atlaskube

Plain-Python data models for MongoDB Atlas custom resources: the AtlasCluster
resource and its specification, project IP access list entries and private
endpoints, status conditions, and the status records kept for clusters,
projects and database users. There are no third-party dependencies.

## Install

```
pip install atlaskube
```

The tests use pytest, available through the `test` extra:

```
pip install "atlaskube[test]"
pytest
```

## Modules

- `atlaskube.common`: `ProviderName` (`AWS`, `GCP`, `AZURE`, `TENANT`),
  `GroupVersion` and the `GROUP_VERSION` constant (`atlas.mongodb.com/v1`),
  `ObjectKey`, `ObjectMeta`, `ResourceRef`, `ResourceRefNamespaced` and
  `LabelSpec`. The metadata and reference types have `to_dict()` and
  `from_dict()`.
- `atlaskube.project`: `IPAccessList` and `PrivateEndpoint`, both immutable.
  `to_atlas()` returns the Atlas API form as a dict; `from_dict()` reads it
  back.
- `atlaskube.conditions`: `ConditionType`, `ConditionStatus`, `Condition`,
  `true_condition`, `false_condition` and `ensure_condition_exists`.
- `atlaskube.status`: `Common`, `AtlasClusterStatus`,
  `AtlasDatabaseUserStatus`, `AtlasProjectStatus`, `ConnectionStrings`,
  `PrivateEndpoint`, `Endpoint`, `ProjectPrivateEndpoint`, and option
  functions such as `atlas_cluster_state_name_option` and
  `atlas_project_id_option` that each return a callable which sets one field
  of a status.
- `atlaskube.cluster`: `AtlasCluster`, `AtlasClusterList`, `AtlasClusterSpec`
  and its parts (`ProviderSettingsSpec`, `AutoScalingSpec`, `ComputeSpec`,
  `BiConnectorSpec`, `ReplicationSpec`, `RegionsConfig`), `ClusterType`, and
  the builders `new_cluster`, `default_aws_cluster`, `default_gcp_cluster` and
  `default_azure_cluster`.

## Example

```python
from atlaskube.cluster import default_aws_cluster
from atlaskube.conditions import ConditionType, true_condition
from atlaskube.status import atlas_cluster_state_name_option

cluster = default_aws_cluster("my-namespace", "my-project").lightweight()
print(cluster.spec.provider_settings.instance_size_name)     # M2
print(cluster.spec.provider_settings.region_name)            # US_EAST_1
print(cluster.spec.provider_settings.backing_provider_name)  # AWS

payload = cluster.spec.cluster()  # dict in the Atlas API form, without projectRef

cluster.update_status(
    [true_condition(ConditionType.READY)],
    atlas_cluster_state_name_option("IDLE"),
)
print(cluster.status.state_name)  # IDLE
```

`AtlasCluster.update_status` replaces the conditions, copies
`metadata.generation` into `status.observed_generation` and applies each
option in turn; anything that is not callable raises `TypeError`.

`atlas_project_object_key()` returns the `ObjectKey` of the cluster's project,
using the cluster's own namespace when the project reference names none.

`ensure_condition_exists(condition, conditions)` returns a new list with the
condition added, or replacing the one of the same type; the list passed in is
left unchanged. When the existing condition has the same status, its
transition time is kept.

IP access list entries are built the same way, each `with_` method returning a
new value:

```python
from atlaskube.project import IPAccessList

entry = IPAccessList().with_cidr("10.0.0.0/24").with_comment("office")
entry.identifier()  # "10.0.0.0/24"
entry.to_atlas()    # {"cidrBlock": "10.0.0.0/24", "comment": "office"}
```

## What it does not do

This package only models the resources. It does not talk to the Atlas API or
to a Kubernetes cluster, does not reconcile or watch resources, and does not
read or write YAML manifests; `to_dict()` output can be handed to whatever
serializer or client you use. There are no AtlasProject or AtlasDatabaseUser
resource classes, only their status records, and `from_dict()` is provided for
`AtlasClusterSpec` but not for the `AtlasCluster` resource as a whole.