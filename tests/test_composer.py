import pytest

from infra_storage.lib.azure.storage import AccountKind, StorageService
from infra_storage.lib.config import StorageConfigException
from infra_storage.modules.azure.storage_account.composer import (
    DELETE_RETENTION_BUFFER_DAYS,
    PITR_RETENTION_DAYS,
    compose_plan,
    delete_retention_days_for,
)
from infra_storage.modules.azure.storage_account.config import (
    AccessConfig,
    BlobPropertiesConfig,
    CorsRuleConfig,
    CustomDomainConfig,
    DiagnosticsConfig,
    IdentityConfig,
    LifecycleConfig,
    LockConfig,
    NetworkRulesConfig,
    QueuePropertiesConfig,
    SharePropertiesConfig,
)
from infra_storage.modules.azure.storage_account.types import (
    AccessTier,
    IdentityType,
    LogCategory,
    MetricCategory,
    NetworkAction,
    NetworkBypass,
    ReplicationType,
    RoleCategory,
)

ALL_KINDS = list(AccountKind)


class TestAccount:
    def test_explicit_name_wins(self, make_config):
        plan = compose_plan(make_config(name="stexplicit", name_prefix="app", environment="dev"))

        assert plan.account_name == "stexplicit"

    def test_name_derived_from_prefix_and_environment(self, make_config):
        config = make_config(name=None, name_prefix="app-data", environment="prod")

        assert compose_plan(config).account_name.startswith("appdataprod")

    def test_missing_name_raises(self, make_config):
        with pytest.raises(StorageConfigException, match="'name'"):
            compose_plan(make_config(name=None, name_prefix="app"))

    def test_sku_from_tier_and_replication(self, make_config):
        plan = compose_plan(make_config(replication_type=ReplicationType.RAGZRS))

        assert plan.sku_name == "Standard_RAGZRS"

    @pytest.mark.parametrize(
        "kind, expected",
        [
            (AccountKind.STORAGE_V2, AccessTier.COOL),
            (AccountKind.BLOB_STORAGE, AccessTier.COOL),
            (AccountKind.FILE_STORAGE, None),
            (AccountKind.STORAGE, None),
        ],
    )
    def test_access_tier_only_for_tiered_kinds(self, make_config, kind, expected):
        plan = compose_plan(make_config(kind=kind, access_tier=AccessTier.COOL))

        assert plan.access_tier == expected

    def test_tags_are_sorted_pairs(self, make_config):
        plan = compose_plan(make_config(tags={"b": "2", "a": "1"}))

        assert plan.tags == (("a", "1"), ("b", "2"))


class TestNetwork:
    def test_no_ip_rules_allows(self, make_config):
        plan = compose_plan(make_config())

        assert plan.network.default_action == NetworkAction.ALLOW

    def test_ip_rules_deny_everything_else(self, make_config):
        plan = compose_plan(make_config(network_rules=NetworkRulesConfig(ip_rules=["203.0.113.7"])))

        assert plan.network.default_action == NetworkAction.DENY
        assert plan.network.ip_rules == ("203.0.113.7",)

    def test_explicit_default_action_wins(self, make_config):
        rules = NetworkRulesConfig(ip_rules=["203.0.113.7"], default_action=NetworkAction.ALLOW)

        assert compose_plan(make_config(network_rules=rules)).network.default_action == NetworkAction.ALLOW

    def test_bypass_joined(self, make_config):
        rules = NetworkRulesConfig(bypass=[NetworkBypass.LOGGING, NetworkBypass.METRICS, NetworkBypass.LOGGING])

        assert compose_plan(make_config(network_rules=rules)).network.bypass == "Logging, Metrics"

    def test_empty_bypass_is_none(self, make_config):
        rules = NetworkRulesConfig(bypass=[])

        assert compose_plan(make_config(network_rules=rules)).network.bypass == "None"

    def test_subnets_kept(self, make_config):
        rules = NetworkRulesConfig(virtual_network_subnet_ids=["/subnets/a", "/subnets/a", "/subnets/b"])

        assert compose_plan(make_config(network_rules=rules)).network.subnet_ids == ("/subnets/a", "/subnets/b")


class TestOptionalBlocks:
    def test_absent_inputs_give_no_blocks(self, make_config):
        plan = compose_plan(make_config())

        assert plan.custom_domain is None
        assert plan.identity is None
        assert plan.blob_service is None
        assert plan.queue_service is None
        assert plan.file_service is None
        assert plan.lifecycle is None
        assert plan.diagnostics == ()

    def test_present_inputs_are_carried(self, make_config):
        domain = CustomDomainConfig(name="files.example.com", use_subdomain=True)
        identity = IdentityConfig(type=IdentityType.USER_ASSIGNED, identity_ids=["/identities/app"])
        cors = CorsRuleConfig(allowed_origins=["https://example.com"], allowed_methods=["GET"])

        plan = compose_plan(
            make_config(
                custom_domain=domain,
                identity=identity,
                blob_properties=BlobPropertiesConfig(versioning_enabled=True, delete_retention_days=14),
                queue_properties=QueuePropertiesConfig(cors_rules=[cors]),
                share_properties=SharePropertiesConfig(delete_retention_days=3, smb_multichannel_enabled=True),
            )
        )

        assert plan.custom_domain == domain
        assert plan.identity == identity
        assert plan.blob_service.versioning_enabled is True
        assert plan.blob_service.delete_retention_days == 14
        assert plan.queue_service.cors_rules == (cors,)
        assert plan.file_service.delete_retention_days == 3
        assert plan.file_service.smb_multichannel_enabled is True

    @pytest.mark.parametrize("kind", [AccountKind.BLOB_STORAGE, AccountKind.BLOCK_BLOB_STORAGE])
    def test_no_share_properties_without_file_service(self, make_config, kind):
        plan = compose_plan(make_config(kind=kind, share_properties=SharePropertiesConfig()))

        assert plan.file_service is None

    @pytest.mark.parametrize(
        "kind", [AccountKind.BLOB_STORAGE, AccountKind.BLOCK_BLOB_STORAGE, AccountKind.FILE_STORAGE]
    )
    def test_no_queue_properties_without_queue_service(self, make_config, kind):
        plan = compose_plan(make_config(kind=kind, queue_properties=QueuePropertiesConfig()))

        assert plan.queue_service is None

    def test_file_storage_keeps_share_properties(self, make_config):
        plan = compose_plan(make_config(kind=AccountKind.FILE_STORAGE, share_properties=SharePropertiesConfig()))

        assert plan.file_service is not None
        assert plan.blob_service is None


class TestBlobService:
    def test_restore_requires_positive_window(self, make_config):
        for days in (None, 0, -3):
            plan = compose_plan(make_config(blob_properties=BlobPropertiesConfig(restore_days=days)))
            assert plan.blob_service.restore_days is None

        plan = compose_plan(make_config(blob_properties=BlobPropertiesConfig(restore_days=6)))
        assert plan.blob_service.restore_days == 6

    def test_point_in_time_restore_fixes_windows(self, make_config):
        plan = compose_plan(make_config(point_in_time_restore=True))

        assert plan.blob_service.restore_days == PITR_RETENTION_DAYS == 30
        assert plan.blob_service.delete_retention_days == 35
        assert plan.blob_service.versioning_enabled is True
        assert plan.blob_service.change_feed_enabled is True

    def test_point_in_time_restore_keeps_other_properties(self, make_config):
        props = BlobPropertiesConfig(last_access_time_enabled=True, container_delete_retention_days=9)

        plan = compose_plan(make_config(point_in_time_restore=True, blob_properties=props))

        assert plan.blob_service.last_access_time_enabled is True
        assert plan.blob_service.container_delete_retention_days == 9

    def test_delete_retention_buffer(self):
        assert DELETE_RETENTION_BUFFER_DAYS == 5
        assert delete_retention_days_for(30) == 35

    @pytest.mark.parametrize("point_in_time_restore", [True, False])
    def test_hierarchical_namespace_forces_features_off(self, make_config, point_in_time_restore):
        props = BlobPropertiesConfig(
            versioning_enabled=True,
            change_feed_enabled=True,
            change_feed_retention_days=7,
            restore_days=10,
            delete_retention_days=20,
        )

        plan = compose_plan(
            make_config(hns_enabled=True, blob_properties=props, point_in_time_restore=point_in_time_restore)
        )

        assert plan.blob_service.versioning_enabled is False
        assert plan.blob_service.change_feed_enabled is False
        assert plan.blob_service.change_feed_retention_days is None
        assert plan.blob_service.restore_days is None

    def test_change_feed_retention_kept_when_enabled(self, make_config):
        props = BlobPropertiesConfig(change_feed_enabled=True, change_feed_retention_days=7)

        assert compose_plan(make_config(blob_properties=props)).blob_service.change_feed_retention_days == 7


class TestChildren:
    def test_duplicates_collapse(self, make_config):
        plan = compose_plan(make_config(containers=["raw", "curated", "raw"], queues=["q", "q"]))

        assert plan.containers == ("raw", "curated")
        assert plan.queues == ("q",)

    def test_unsupported_children_dropped(self, make_config):
        plan = compose_plan(
            make_config(
                kind=AccountKind.BLOCK_BLOB_STORAGE,
                containers=["raw"],
                queues=["q"],
                tables=["t"],
                shares=["s"],
            )
        )

        assert plan.containers == ("raw",)
        assert plan.queues == ()
        assert plan.tables == ()
        assert plan.shares == ()

    def test_file_storage_only_shares(self, make_config):
        plan = compose_plan(make_config(kind=AccountKind.FILE_STORAGE, containers=["raw"], shares=["s"]))

        assert plan.containers == ()
        assert plan.shares == ("s",)


class TestGrants:
    def test_one_grant_per_distinct_principal(self, make_config):
        access = AccessConfig(
            blob_readers=["p1", "p2", "p1"],
            queue_contributors=["p1"],
            file_contributors=["p3", "p3", "p3"],
        )

        grants = compose_plan(make_config(access=access)).grants

        by_category = {}
        for grant in grants:
            by_category.setdefault(grant.category, []).append(grant.principal_id)

        assert by_category == {
            RoleCategory.BLOB_READERS: ["p1", "p2"],
            RoleCategory.QUEUE_CONTRIBUTORS: ["p1"],
            RoleCategory.FILE_CONTRIBUTORS: ["p3"],
        }

    def test_every_category_maps_to_a_role(self, make_config):
        access = AccessConfig(**{category.field_name: ["p"] for category in RoleCategory})

        grants = compose_plan(make_config(access=access)).grants

        assert len(grants) == 8
        assert {g.role_name for g in grants} == {category.value for category in RoleCategory}

    def test_assignment_names_are_stable_and_distinct(self, make_config):
        access = AccessConfig(blob_readers=["p1", "p2"], blob_contributors=["p1"])

        first = compose_plan(make_config(access=access)).grants
        second = compose_plan(make_config(access=access)).grants

        assert [g.assignment_name for g in first] == [g.assignment_name for g in second]
        assert len({g.assignment_name for g in first}) == 3


class TestPolicies:
    def test_lifecycle_planned(self, make_config):
        plan = compose_plan(make_config(lifecycle=LifecycleConfig(version_retention_days=10)))

        assert plan.lifecycle.version_retention_days == 10
        assert plan.lifecycle.snapshot_retention_days is None

    def test_no_lifecycle_without_blobs(self, make_config):
        plan = compose_plan(make_config(kind=AccountKind.FILE_STORAGE, lifecycle=LifecycleConfig()))

        assert plan.lifecycle is None

    def test_lock_planned_by_default(self, make_config):
        plan = compose_plan(make_config())

        assert plan.lock.settling_seconds == 30
        assert plan.lock.level.value == "CanNotDelete"

    def test_lock_disabled(self, make_config):
        assert compose_plan(make_config(lock=LockConfig(enabled=False))).lock is None


class TestDiagnostics:
    def test_one_setting_per_supported_service(self, make_config):
        diagnostics = DiagnosticsConfig(log_analytics_workspace_id="/workspaces/logs")

        plan = compose_plan(make_config(diagnostics=diagnostics))

        assert [d.service for d in plan.diagnostics] == [
            None,
            StorageService.BLOB,
            StorageService.QUEUE,
            StorageService.TABLE,
            StorageService.FILE,
        ]
        assert all(d.log_analytics_workspace_id == "/workspaces/logs" for d in plan.diagnostics)

    def test_block_blob_only_has_blob_setting(self, make_config):
        plan = compose_plan(make_config(kind=AccountKind.BLOCK_BLOB_STORAGE, diagnostics=DiagnosticsConfig()))

        assert [d.service for d in plan.diagnostics] == [None, StorageService.BLOB]

    def test_category_selection_drives_enabled(self, make_config):
        diagnostics = DiagnosticsConfig(
            log_categories=[LogCategory.STORAGE_DELETE],
            metric_categories=[MetricCategory.TRANSACTION],
        )

        blob = compose_plan(make_config(diagnostics=diagnostics)).diagnostics[1]

        assert dict(blob.logs) == {
            LogCategory.STORAGE_READ: False,
            LogCategory.STORAGE_WRITE: False,
            LogCategory.STORAGE_DELETE: True,
        }
        assert dict(blob.metrics) == {MetricCategory.TRANSACTION: True, MetricCategory.CAPACITY: False}

    def test_every_setting_lists_both_metric_categories(self, make_config):
        plan = compose_plan(make_config(diagnostics=DiagnosticsConfig()))

        for diagnostic in plan.diagnostics:
            assert dict(diagnostic.metrics) == {MetricCategory.TRANSACTION: True, MetricCategory.CAPACITY: True}

    def test_account_setting_has_no_logs(self, make_config):
        account = compose_plan(make_config(diagnostics=DiagnosticsConfig())).diagnostics[0]

        assert account.logs == ()
        assert account.name == "stdata-diagnostics"


@pytest.mark.parametrize("kind", ALL_KINDS)
def test_composing_twice_gives_equal_plans(make_config, kind):
    def config():
        return make_config(
            name=None,
            name_prefix="app",
            environment="dev",
            kind=kind,
            point_in_time_restore=True,
            network_rules=NetworkRulesConfig(ip_rules=["203.0.113.7"]),
            containers=["raw"],
            queues=["q"],
            tables=["t"],
            shares=["s"],
            diagnostics=DiagnosticsConfig(),
            access=AccessConfig(blob_readers=["p1", "p1"]),
            tags={"team": "data"},
        )

    assert compose_plan(config()) == compose_plan(config())
